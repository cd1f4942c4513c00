"""Supabase client construction and the remote store gateway."""

from functools import lru_cache

import httpx
from loguru import logger
from postgrest.exceptions import APIError
from supabase import AuthError, Client, ClientOptions, create_client
from supabase_auth import SyncGoTrueClient

from . import config
from .errors import UpstreamError
from .models import Identity

# Postgres invalid_text_representation, e.g. a non-numeric id against a bigint column
INVALID_TEXT_REPRESENTATION = "22P02"


def _client(key: str) -> Client:
    return create_client(
        config.SUPABASE_URL,
        key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


def _session_client(http_client: httpx.Client) -> SyncGoTrueClient:
    """Bare auth client for one password sign-in, on a caller-owned HTTP client."""
    key = config.SUPABASE_SERVICE_ROLE_KEY
    return SyncGoTrueClient(
        url=f"{config.SUPABASE_URL}/auth/v1",
        headers={"apikey": key, "Authorization": f"Bearer {key}"},
        auto_refresh_token=False,
        persist_session=False,
        http_client=http_client,
    )


def _first(rows: list[dict] | None) -> dict | None:
    return rows[0] if rows else None


class SupabaseStore:
    """One method per remote call.

    ``client`` holds the restricted (anon) key and serves end-user reads and
    writes plus token validation. ``admin`` holds the service-role key and is
    only used for account management. SDK errors surface as UpstreamError.
    """

    def __init__(self, client: Client, admin: Client, session_factory=None):
        self.client = client
        self.admin = admin
        # Password sign-in stores the session on the client it ran on, so it
        # gets a client of its own.
        self.session_factory = session_factory or _session_client

    def _run(self, operation: str, query, invalid_id_ok: bool = False):
        try:
            return query.execute().data
        except APIError as e:
            if invalid_id_ok and e.code == INVALID_TEXT_REPRESENTATION:
                # No row can have an id that does not parse
                return []
            logger.warning(f"{operation} failed: {e.message}")
            raise UpstreamError(e.message or "Upstream request failed") from e

    # ----- Identity -----

    def resolve_identity(self, token: str) -> Identity | None:
        """Validate a bearer token with the auth service. None when rejected."""
        try:
            res = self.client.auth.get_user(token)
        except AuthError as e:
            logger.debug(f"Token rejected: {e.message}")
            return None
        if not res or not res.user:
            return None
        return Identity.from_user(res.user)

    def sign_in(self, email: str, password: str) -> dict:
        """Raises AuthError when the credentials are rejected."""
        with httpx.Client() as http_client:
            res = self.session_factory(http_client).sign_in_with_password({"email": email, "password": password})
        return res.model_dump(mode="json")

    def create_user(self, email: str, password: str) -> dict:
        """Create a confirmed auth user. Raises AuthError when rejected."""
        res = self.admin.auth.admin.create_user({
            "email": email,
            "password": password,
            "email_confirm": True,
        })
        return res.model_dump(mode="json")

    def delete_user(self, user_id: str) -> None:
        try:
            self.admin.auth.admin.delete_user(user_id)
        except AuthError as e:
            raise UpstreamError(e.message) from e

    # ----- Profiles -----

    def set_company_name(self, user_id: str, company_name: str) -> None:
        self._run(
            "set company name",
            self.admin.table(config.REALTORS_TABLE).update({"company_name": company_name}).eq("id", user_id),
        )

    def get_profile(self, user_id: str) -> dict | None:
        rows = self._run(
            "get profile",
            self.client.table(config.REALTORS_TABLE).select("*").eq("id", user_id).limit(1),
        )
        return _first(rows)

    def update_profile(self, user_id: str, fields: dict) -> dict | None:
        rows = self._run(
            "update profile",
            self.client.table(config.REALTORS_TABLE).update(fields).eq("id", user_id),
        )
        return _first(rows)

    # ----- Properties -----

    def list_properties(self) -> list[dict]:
        return self._run("list properties", self.client.table(config.PROPERTIES_TABLE).select("*"))

    def list_realtor_properties(self, realtor_id: str) -> list[dict]:
        return self._run(
            "list realtor properties",
            self.client.table(config.PROPERTIES_TABLE).select("*").eq("realtor_id", realtor_id),
        )

    def list_realtor_property_ids(self, realtor_id: str) -> list:
        rows = self._run(
            "list realtor property ids",
            self.client.table(config.PROPERTIES_TABLE).select("id").eq("realtor_id", realtor_id),
        )
        return [r["id"] for r in rows]

    def get_property(self, property_id) -> dict | None:
        rows = self._run(
            "get property",
            self.client.table(config.PROPERTIES_TABLE).select("*").eq("id", property_id).limit(1),
        )
        return _first(rows)

    def get_property_owner(self, property_id) -> tuple[bool, str | None]:
        """(exists, realtor_id) for a property."""
        rows = self._run(
            "get property owner",
            self.client.table(config.PROPERTIES_TABLE).select("realtor_id").eq("id", property_id).limit(1),
            invalid_id_ok=True,
        )
        row = _first(rows)
        if row is None:
            return False, None
        return True, row.get("realtor_id")

    def create_property(self, realtor_id: str, fields: dict) -> dict | None:
        rows = self._run(
            "create property",
            self.client.table(config.PROPERTIES_TABLE).insert({**fields, "realtor_id": realtor_id}),
        )
        return _first(rows)

    def update_property(self, property_id, realtor_id: str, fields: dict) -> dict | None:
        """Update only if still owned by realtor_id. None when nothing matched."""
        rows = self._run(
            "update property",
            self.client.table(config.PROPERTIES_TABLE)
            .update(fields)
            .eq("id", property_id)
            .eq("realtor_id", realtor_id),
        )
        return _first(rows)

    def delete_property(self, property_id, realtor_id: str) -> bool:
        rows = self._run(
            "delete property",
            self.client.table(config.PROPERTIES_TABLE)
            .delete()
            .eq("id", property_id)
            .eq("realtor_id", realtor_id),
        )
        return bool(rows)

    # ----- Bookings -----

    def create_booking(self, fields: dict) -> dict | None:
        rows = self._run("create booking", self.client.table(config.BOOKINGS_TABLE).insert(fields))
        return _first(rows)

    def get_booking_property_id(self, booking_id):
        """property_id of a booking, None when the booking does not exist."""
        rows = self._run(
            "get booking",
            self.client.table(config.BOOKINGS_TABLE).select("property_id").eq("id", booking_id).limit(1),
            invalid_id_ok=True,
        )
        row = _first(rows)
        return row["property_id"] if row else None

    def list_bookings_for_properties(self, property_ids: list) -> list[dict]:
        if not property_ids:
            return []
        return self._run(
            "list bookings",
            self.client.table(config.BOOKINGS_TABLE).select("*").in_("property_id", property_ids),
        )

    def update_booking_status(self, booking_id, property_id, status: str) -> dict | None:
        """Update only if the booking still belongs to property_id."""
        rows = self._run(
            "update booking",
            self.client.table(config.BOOKINGS_TABLE)
            .update({"status": status})
            .eq("id", booking_id)
            .eq("property_id", property_id),
        )
        return _first(rows)


@lru_cache(maxsize=1)
def get_store() -> SupabaseStore:
    """Build the process-wide store once. Used as a FastAPI dependency."""
    missing = [
        name for name, value in (
            ("SUPABASE_URL", config.SUPABASE_URL),
            ("SUPABASE_ANON_KEY", config.SUPABASE_ANON_KEY),
            ("SUPABASE_SERVICE_ROLE_KEY", config.SUPABASE_SERVICE_ROLE_KEY),
        )
        if not value
    ]
    if missing:
        raise RuntimeError(f"Missing configuration: {', '.join(missing)}")
    return SupabaseStore(
        client=_client(config.SUPABASE_ANON_KEY),
        admin=_client(config.SUPABASE_SERVICE_ROLE_KEY),
    )
