# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.routes.admin import quiz_router as admin_quiz_router
from app.routes.admin import router as admin_router
from app.routes.donation import router as donation_router
from app.routes.qna import router as qna_router
from app.routes.quiz import router as quiz_router
from app.routes.tracking import router as tracking_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to start with incomplete configuration
    settings.validate_required()
    if not settings.STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY not set; donation checkout is disabled")
    if not settings.SUPABASE_URL:
        logger.warning("SUPABASE_URL not set; authenticated endpoints are disabled")
    logger.info(f"🚀 {settings.PROJECT_NAME} starting ({settings.ENVIRONMENT})")
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    return {"message": f"{settings.PROJECT_NAME} is running"}


app.include_router(quiz_router)
app.include_router(admin_router)
app.include_router(admin_quiz_router)
app.include_router(qna_router)
app.include_router(tracking_router)
app.include_router(donation_router)


if __name__ == "__main__":
    import uvicorn

    # Development server
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
