"""Auth Handler - Login, logout and the current session."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from aribe.contracts.user import AuthResult, LoginRequest, UserProfile
from aribe.handlers.dependencies import bearer_token, get_auth, get_current_user
from aribe.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth),
) -> JSONResponse:
    """Login com e-mail e senha; 401 com a mensagem traduzida se falhar."""
    result = await auth.sign_in(credentials.email, credentials.password)
    status_code = status.HTTP_200_OK if result.success else status.HTTP_401_UNAUTHORIZED
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


@router.post("/logout", response_model=AuthResult)
async def logout(
    token: str = Depends(bearer_token),
    auth: AuthService = Depends(get_auth),
) -> AuthResult:
    """Encerra a sessão atual."""
    return await auth.sign_out(token)


@router.get("/me", response_model=UserProfile)
async def me(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    """Usuário autenticado e seu perfil (0 = admin, 1 = usuário)."""
    return user
