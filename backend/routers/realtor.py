"""Realtor dashboard: own properties and the bookings made against them."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from pydantic import BaseModel

from realty import ownership
from realty.config import PROPERTY_FIELDS
from realty.db import SupabaseStore, get_store
from realty.errors import UpstreamError
from realty.models import Identity

from backend.auth import get_current_user

router = APIRouter(prefix="/api/realtor", tags=["realtor"])


class PropertyBody(BaseModel):
    title: str | None = None
    location: str | None = None
    price: int | float | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    imageUrl: str | None = None
    description: str | None = None


class BookingStatusBody(BaseModel):
    status: str | None = None


@router.get("/properties")
def list_own_properties(user: Identity = Depends(get_current_user), store: SupabaseStore = Depends(get_store)):
    return store.list_realtor_properties(user.id)


@router.post("/properties", status_code=201)
def create_property(
    body: PropertyBody,
    user: Identity = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    """realtor_id is always the caller."""
    row = store.create_property(user.id, body.model_dump(exclude_unset=True))
    if row is None:
        raise UpstreamError("Could not create property")
    return row


@router.put("/properties/{property_id}")
def update_property(
    property_id: str,
    body: dict[str, Any] = Body(default={}),
    user: Identity = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    """Any subset of property fields. 404 if missing, 403 if not the caller's."""
    fields = {k: body[k] for k in PROPERTY_FIELDS if k in body}
    return ownership.update_owned_property(store, property_id, user, fields)


@router.delete("/properties/{property_id}", status_code=204)
def delete_property(
    property_id: str,
    user: Identity = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    ownership.delete_owned_property(store, property_id, user)
    return Response(status_code=204)


@router.get("/bookings")
def list_own_bookings(user: Identity = Depends(get_current_user), store: SupabaseStore = Depends(get_store)):
    """Bookings on any property the caller owns. No join: ids first, then bookings."""
    property_ids = store.list_realtor_property_ids(user.id)
    return store.list_bookings_for_properties(property_ids)


@router.put("/bookings/{booking_id}")
def update_booking_status(
    booking_id: str,
    body: BookingStatusBody,
    user: Identity = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    status = (body.status or "").strip()
    if not status:
        raise HTTPException(status_code=400, detail="Status is required")
    return ownership.update_owned_booking_status(store, booking_id, user, status)
