"""FastAPI Dependencies - Services, workflow and the authenticated user."""

from fastapi import Depends, Header, HTTPException, status

from aribe.contracts.user import UserProfile
from aribe.core.booking import BookingWorkflow
from aribe.core.templates import get_template
from aribe.services.auth import AuthService, get_auth_service
from aribe.services.supabase import SupabaseService, get_supabase_service


def get_store() -> SupabaseService:
    """Persistence collaborator."""
    return get_supabase_service()


def get_auth() -> AuthService:
    """Identity collaborator."""
    return get_auth_service()


def get_workflow(store: SupabaseService = Depends(get_store)) -> BookingWorkflow:
    """Booking workflow bound to the real clock."""
    return BookingWorkflow(store)


def bearer_token(authorization: str | None = Header(None)) -> str:
    """Extract the token from an `Authorization: Bearer ...` header."""
    if not authorization:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, get_template("unauthorized"))

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, get_template("unauthorized"))
    return token


async def get_current_user(
    token: str = Depends(bearer_token),
    auth: AuthService = Depends(get_auth),
) -> UserProfile:
    """Authenticated user with the role looked up from `usuarios`."""
    user = await auth.get_user(token)
    if user is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, get_template("unauthorized"))
    return user


async def require_admin(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    """Only administrators pass."""
    if not user.is_admin:
        raise HTTPException(status.HTTP_403_FORBIDDEN, get_template("forbidden"))
    return user
