"""User Contract - Identity and role models."""

from enum import IntEnum

from pydantic import BaseModel, Field


class UserRole(IntEnum):
    """Perfis de acesso (0 = administrador, 1 = usuário comum)."""

    ADMIN = 0
    USER = 1


class UserProfile(BaseModel):
    """Usuário autenticado e seu perfil."""

    id: str = Field(..., description="UID do provedor de identidade")
    email: str | None = Field(None, description="E-mail do usuário")
    role: UserRole = Field(UserRole.USER, description="Perfil de acesso")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class LoginRequest(BaseModel):
    """Credenciais de login."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """Resultado de login/logout."""

    success: bool
    user: UserProfile | None = None
    access_token: str | None = None
    error: str | None = None
