"""Realtor profile of the signed-in user."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from realty.db import SupabaseStore, get_store
from realty.errors import UpstreamError
from realty.models import Identity

from backend.auth import get_current_user

router = APIRouter(prefix="/api", tags=["profile"])


class ProfileBody(BaseModel):
    name: str | None = None
    company_name: str | None = None
    email: str | None = None


@router.get("/profile")
def get_profile(user: Identity = Depends(get_current_user), store: SupabaseStore = Depends(get_store)):
    profile = store.get_profile(user.id)
    if profile is None:
        raise UpstreamError("Profile not found")
    return profile


@router.put("/profile")
def update_profile(
    body: ProfileBody,
    user: Identity = Depends(get_current_user),
    store: SupabaseStore = Depends(get_store),
):
    """Only fields present in the body are written."""
    fields = body.model_dump(exclude_unset=True)
    if not fields:
        return get_profile(user, store)
    profile = store.update_profile(user.id, fields)
    if profile is None:
        raise UpstreamError("Profile not found")
    return profile
