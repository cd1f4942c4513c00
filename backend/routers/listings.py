"""Public listing endpoints."""
from fastapi import APIRouter, Depends

from realty.db import SupabaseStore, get_store

router = APIRouter(prefix="/api", tags=["listings"])


@router.get("/properties")
def list_properties(store: SupabaseStore = Depends(get_store)):
    """All properties, unauthenticated."""
    return store.list_properties()
