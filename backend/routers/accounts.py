"""Login and signup. Both run server-side with the service-role key."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from realty import accounts
from realty.db import SupabaseStore, get_store

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginBody(BaseModel):
    email: str = ""
    password: str = ""


class SignupBody(BaseModel):
    email: str = ""
    password: str = ""
    company_name: str = ""


@router.post("/login")
def login(body: LoginBody, store: SupabaseStore = Depends(get_store)):
    """Body: { "email", "password" }. Returns { "user", "session" } or 401."""
    email = (body.email or "").strip()
    if not email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")
    return accounts.login(store, email, body.password)


@router.post("/signup", status_code=201)
def signup(body: SignupBody, store: SupabaseStore = Depends(get_store)):
    email = (body.email or "").strip()
    company_name = (body.company_name or "").strip()
    if not email or not body.password or not company_name:
        raise HTTPException(status_code=400, detail="Email, password, and company name are required")
    return accounts.signup(store, email, body.password, company_name)
