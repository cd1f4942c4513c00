import itertools

import pytest
from fastapi.testclient import TestClient
from supabase import AuthError

from backend.main import app
from realty.db import get_store
from realty.errors import UpstreamError
from realty.models import Identity

ALICE = Identity(id="user-alice", email="alice@example.com")
BOB = Identity(id="user-bob", email="bob@example.com")


class FakeStore:
    """In-memory stand-in for SupabaseStore with the same method set."""

    def __init__(self):
        self._ids = itertools.count(100)
        self.tokens = {"alice-token": ALICE, "bob-token": BOB}
        self.passwords = {"alice@example.com": "secret"}
        self.users = {}
        self.realtors = {
            ALICE.id: {"id": ALICE.id, "name": "Alice", "company_name": "Acme Homes", "email": ALICE.email},
            BOB.id: {"id": BOB.id, "name": "Bob", "company_name": "Bob Realty", "email": BOB.email},
        }
        self.properties = {
            1: {"id": 1, "title": "Loft", "location": "Leeds", "price": 250000, "bedrooms": 2,
                "bathrooms": 1, "imageUrl": "loft.jpg", "description": "Bright", "realtor_id": ALICE.id},
            2: {"id": 2, "title": "Cottage", "location": "York", "price": 310000, "bedrooms": 3,
                "bathrooms": 2, "imageUrl": "cottage.jpg", "description": "Quiet", "realtor_id": BOB.id},
        }
        self.bookings = {
            10: {"id": 10, "property_id": 1, "customer_name": "Carol", "customer_email": "c@example.com",
                 "booking_date": "2026-11-01", "booking_time": "10:00", "status": "pending",
                 "created_at": "2026-10-01T09:00:00"},
            11: {"id": 11, "property_id": 2, "customer_name": "Dan", "customer_email": "d@example.com",
                 "booking_date": "2026-11-02", "booking_time": "11:00", "status": "pending",
                 "created_at": "2026-10-01T09:30:00"},
        }
        self.writes = []
        self.fail_company_name = False
        self.fail_reads = False
        self.fail_writes = False

    def _key(self, value):
        try:
            return int(value)
        except (TypeError, ValueError):
            return value

    def _read(self):
        if self.fail_reads:
            raise UpstreamError("connection refused")

    def _write(self):
        if self.fail_writes:
            raise UpstreamError("new row violates row-level security policy")

    def resolve_identity(self, token):
        return self.tokens.get(token)

    def sign_in(self, email, password):
        if self.passwords.get(email) != password:
            raise AuthError("Invalid login credentials", "invalid_credentials")
        return {"user": {"id": "user-alice", "email": email}, "session": {"access_token": "alice-token"}}

    def create_user(self, email, password):
        if email in self.passwords:
            raise AuthError("User already registered", "email_exists")
        user_id = f"user-{next(self._ids)}"
        self.passwords[email] = password
        self.users[user_id] = email
        self.realtors[user_id] = {"id": user_id, "name": None, "company_name": None, "email": email}
        self.writes.append(("create_user", user_id))
        return {"user": {"id": user_id, "email": email}}

    def delete_user(self, user_id):
        email = self.users.pop(user_id)
        self.passwords.pop(email)
        self.realtors.pop(user_id, None)
        self.writes.append(("delete_user", user_id))

    def set_company_name(self, user_id, company_name):
        if self.fail_company_name:
            raise UpstreamError("permission denied for table realtors")
        self.realtors[user_id]["company_name"] = company_name

    def get_profile(self, user_id):
        self._read()
        return self.realtors.get(user_id)

    def update_profile(self, user_id, fields):
        self._write()
        self.realtors[user_id].update(fields)
        self.writes.append(("update_profile", user_id))
        return self.realtors[user_id]

    def list_properties(self):
        self._read()
        return list(self.properties.values())

    def list_realtor_properties(self, realtor_id):
        return [p for p in self.properties.values() if p["realtor_id"] == realtor_id]

    def list_realtor_property_ids(self, realtor_id):
        self._read()
        return [p["id"] for p in self.list_realtor_properties(realtor_id)]

    def get_property(self, property_id):
        return self.properties.get(self._key(property_id))

    def get_property_owner(self, property_id):
        row = self.properties.get(self._key(property_id))
        return (False, None) if row is None else (True, row["realtor_id"])

    def create_property(self, realtor_id, fields):
        self._write()
        pid = next(self._ids)
        self.properties[pid] = {"id": pid, **fields, "realtor_id": realtor_id}
        self.writes.append(("create_property", pid))
        return self.properties[pid]

    def update_property(self, property_id, realtor_id, fields):
        self._write()
        row = self.properties.get(self._key(property_id))
        if row is None or row["realtor_id"] != realtor_id:
            return None
        row.update(fields)
        self.writes.append(("update_property", row["id"]))
        return row

    def delete_property(self, property_id, realtor_id):
        self._write()
        row = self.properties.get(self._key(property_id))
        if row is None or row["realtor_id"] != realtor_id:
            return False
        del self.properties[row["id"]]
        self.writes.append(("delete_property", row["id"]))
        return True

    def create_booking(self, fields):
        self._write()
        bid = next(self._ids)
        self.bookings[bid] = {"id": bid, **fields, "status": "pending", "created_at": "2026-10-19T12:00:00"}
        self.writes.append(("create_booking", bid))
        return self.bookings[bid]

    def get_booking_property_id(self, booking_id):
        row = self.bookings.get(self._key(booking_id))
        return row["property_id"] if row else None

    def list_bookings_for_properties(self, property_ids):
        self._read()
        return [b for b in self.bookings.values() if b["property_id"] in property_ids]

    def update_booking_status(self, booking_id, property_id, status):
        self._write()
        row = self.bookings.get(self._key(booking_id))
        if row is None or row["property_id"] != property_id:
            return None
        row["status"] = status
        self.writes.append(("update_booking", row["id"]))
        return row


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob():
    return {"Authorization": "Bearer bob-token"}
