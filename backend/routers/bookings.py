"""Public booking submission."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from realty.config import BOOKING_FIELDS
from realty.db import SupabaseStore, get_store
from realty.errors import UpstreamError

router = APIRouter(prefix="/api", tags=["bookings"])


class BookingBody(BaseModel):
    property_id: int | str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    booking_date: str | None = None
    booking_time: str | None = None


def _blank(v) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


@router.post("/bookings", status_code=201)
def create_booking(body: BookingBody, store: SupabaseStore = Depends(get_store)):
    """Insert a booking; status and created_at take the table defaults."""
    fields = {name: getattr(body, name) for name in BOOKING_FIELDS}
    if any(_blank(v) for v in fields.values()):
        raise HTTPException(status_code=400, detail="Missing required fields")
    booking = store.create_booking(fields)
    if booking is None:
        raise UpstreamError("Could not create booking")
    return {"message": "Booking created successfully!", "booking": booking}
