"""Login and signup against the auth service."""
from loguru import logger
from supabase import AuthError

from .errors import BadRequestError, UnauthenticatedError, UpstreamError


def login(store, email: str, password: str) -> dict:
    """Return the session payload ({user, session}) for valid credentials."""
    try:
        return store.sign_in(email, password)
    except AuthError as e:
        logger.info(f"Login rejected for {email}: {e.message}")
        raise UnauthenticatedError(e.message) from e


def signup(store, email: str, password: str, company_name: str) -> dict:
    """Create a confirmed user and stamp the company name on their realtor row.

    The realtor row is created by a database trigger on the auth user. If
    setting the company name fails, the new auth user is deleted again so no
    half-registered account is left behind.
    """
    try:
        created = store.create_user(email, password)
    except AuthError as e:
        logger.info(f"Signup rejected for {email}: {e.message}")
        raise BadRequestError(e.message) from e

    user_id = created["user"]["id"]
    try:
        store.set_company_name(user_id, company_name)
    except UpstreamError as e:
        logger.warning(f"Signup profile update failed for {user_id}, rolling back")
        try:
            store.delete_user(user_id)
        except UpstreamError:
            logger.exception(f"Rollback failed, auth user {user_id} left without profile")
        raise UpstreamError("User created but profile update failed.") from e
    return created
