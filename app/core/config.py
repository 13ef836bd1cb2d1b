from typing import List

from pydantic_settings import BaseSettings

from app.core.exceptions import ConfigurationError

DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./app.db"
    PROJECT_NAME: str = "Ibadah Station Backend"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # Admin dashboard
    ADMIN_PASSWORD: str = DEFAULT_ADMIN_PASSWORD

    # Supabase Auth
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""

    # Stripe / donations
    STRIPE_SECRET_KEY: str = ""
    STRIPE_API_BASE: str = "https://api.stripe.com/v1"
    SITE_URL: str = "http://localhost:3000"

    HTTP_TIMEOUT_SECONDS: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def missing_fields(self) -> List[str]:
        """Names of settings that must be set for this environment but are empty"""
        required = ["DATABASE_URL", "ADMIN_PASSWORD"]
        if self.is_production:
            required += ["SUPABASE_URL", "SUPABASE_ANON_KEY", "STRIPE_SECRET_KEY"]

        missing = [name for name in required if not getattr(self, name)]
        if self.is_production and self.ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
            missing.append("ADMIN_PASSWORD")
        return missing

    def validate_required(self) -> None:
        """Fail fast at startup when required settings are absent"""
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(sorted(set(missing)))}"
            )


settings = Settings()


def get_settings() -> Settings:
    return settings
