import logging
from typing import Optional

import requests

from app.core.config import Settings, settings
from app.core.exceptions import (
    ConfigurationError,
    PaymentProviderError,
    ValidationError,
)
from app.schemas.donation import DonationCheckoutRequest, DonationCheckoutResponse

# Set up logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

MIN_DONATION_THB = 20
CURRENCY = "thb"
PAYMENT_METHOD_TYPES = ["card", "promptpay"]

PRODUCT_TEXT = {
    "th": {
        "name": "สนับสนุน Ibadah Station",
        "description": "ขอบคุณที่สนับสนุนการพัฒนาแพลตฟอร์มเพื่อการเรียนรู้อิสลาม",
    },
    "en": {
        "name": "Support Ibadah Station",
        "description": "Thank you for supporting Islamic learning platform development",
    },
}


def to_satang(amount: float) -> int:
    """THB to the smallest currency unit, rounding half up"""
    return int(amount * 100 + 0.5)


class DonationService:
    """Creates Stripe Checkout sessions for one-off donations"""

    def __init__(self, config: Settings = settings):
        if not config.STRIPE_SECRET_KEY:
            raise ConfigurationError("STRIPE_SECRET_KEY is not configured")
        self.config = config

    def build_checkout_form(
        self, amount: float, locale: str, origin: str
    ) -> dict:
        """Form fields for POST /v1/checkout/sessions"""
        text = PRODUCT_TEXT["th"] if locale == "th" else PRODUCT_TEXT["en"]
        form = {
            "mode": "payment",
            "line_items[0][price_data][currency]": CURRENCY,
            "line_items[0][price_data][product_data][name]": text["name"],
            "line_items[0][price_data][product_data][description]": text[
                "description"
            ],
            "line_items[0][price_data][product_data][images][0]": f"{origin}/logo.jpg",
            "line_items[0][price_data][unit_amount]": str(to_satang(amount)),
            "line_items[0][quantity]": "1",
            "success_url": f"{origin}/{locale}?donation=success",
            "cancel_url": f"{origin}/{locale}?donation=cancelled",
            "metadata[type]": "donation",
            "metadata[locale]": locale,
        }
        for index, method in enumerate(PAYMENT_METHOD_TYPES):
            form[f"payment_method_types[{index}]"] = method
        return form

    def create_checkout_session(
        self, request: DonationCheckoutRequest, origin: Optional[str] = None
    ) -> DonationCheckoutResponse:
        if not request.amount or request.amount < MIN_DONATION_THB:
            raise ValidationError(
                f"Minimum donation amount is {MIN_DONATION_THB} THB",
                code="MIN_DONATION",
            )

        origin = (origin or self.config.SITE_URL).rstrip("/")
        form = self.build_checkout_form(request.amount, request.locale, origin)

        try:
            resp = requests.post(
                f"{self.config.STRIPE_API_BASE}/checkout/sessions",
                data=form,
                auth=(self.config.STRIPE_SECRET_KEY, ""),
                timeout=self.config.HTTP_TIMEOUT_SECONDS,
            )
            resp.raise_for_status()
            session = resp.json()
        except requests.RequestException as e:
            logger.error(f"❌ Stripe checkout error: {e}")
            raise PaymentProviderError("Failed to create checkout session") from e

        logger.info(f"💳 Checkout session {session.get('id')} created")
        return DonationCheckoutResponse(session_id=session["id"], url=session.get("url"))
