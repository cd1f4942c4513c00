"""Ownership guard for property and booking mutations.

A caller may only change a property whose ``realtor_id`` is their identity,
and a booking whose property they own. The check runs before the write so a
missing or foreign resource is reported as 404 / 403 without touching it;
the write itself is also filtered by owner, so a resource that changes hands
between the check and the write is left alone.
"""
from .errors import ForbiddenError, NotFoundError
from .models import Identity


def check_property_owner(store, property_id, identity: Identity) -> None:
    exists, owner = store.get_property_owner(property_id)
    if not exists:
        raise NotFoundError("Property not found")
    if not identity.owns(owner):
        raise ForbiddenError("Unauthorized")


def check_booking_owner(store, booking_id, identity: Identity):
    """Return the booking's property_id once the caller is known to own it."""
    property_id = store.get_booking_property_id(booking_id)
    if property_id is None:
        raise NotFoundError("Booking not found")
    check_property_owner(store, property_id, identity)
    return property_id


def update_owned_property(store, property_id, identity: Identity, fields: dict) -> dict:
    check_property_owner(store, property_id, identity)
    if not fields:
        row = store.get_property(property_id)
    else:
        row = store.update_property(property_id, identity.id, fields)
    if row is None:
        # Deleted or reassigned after the check
        check_property_owner(store, property_id, identity)
        raise NotFoundError("Property not found")
    return row


def delete_owned_property(store, property_id, identity: Identity) -> None:
    check_property_owner(store, property_id, identity)
    if not store.delete_property(property_id, identity.id):
        check_property_owner(store, property_id, identity)
        raise NotFoundError("Property not found")


def update_owned_booking_status(store, booking_id, identity: Identity, status: str) -> dict:
    property_id = check_booking_owner(store, booking_id, identity)
    row = store.update_booking_status(booking_id, property_id, status)
    if row is None:
        check_booking_owner(store, booking_id, identity)
        raise NotFoundError("Booking not found")
    return row
