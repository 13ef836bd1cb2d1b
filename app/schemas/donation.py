from typing import Optional

from pydantic import BaseModel, Field


class DonationCheckoutRequest(BaseModel):
    amount: Optional[float] = Field(None, description="Donation amount in THB")
    locale: str = Field("en", description="Locale of the donor (th or en)")


class DonationCheckoutResponse(BaseModel):
    session_id: str
    url: Optional[str] = None
