from typing import Optional

from fastapi import APIRouter, Depends, Header

from app.core.config import Settings, get_settings
from app.core.deps import internal_error, to_http_exception
from app.core.exceptions import AppError
from app.schemas.donation import DonationCheckoutRequest, DonationCheckoutResponse
from app.services.donation import DonationService

router = APIRouter(tags=["donate"], prefix="/api/donate")


@router.post("/checkout", response_model=DonationCheckoutResponse)
def create_checkout(
    request: DonationCheckoutRequest,
    origin: Optional[str] = Header(None),
    config: Settings = Depends(get_settings),
):
    """
    Create a Stripe Checkout session for a donation

    The minimum donation is 20 THB. The response carries the Checkout
    session id and the hosted payment page URL.
    """
    try:
        service = DonationService(config)
        return service.create_checkout_session(request, origin=origin)
    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
