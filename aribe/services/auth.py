"""Serviço de Autenticação - Supabase Auth e perfis de acesso."""

from collections.abc import Callable
from typing import Any

from aribe.contracts.user import AuthResult, UserProfile, UserRole
from aribe.core.errors import CollaboratorError
from aribe.services.supabase import (
    create_session_client,
    create_supabase_client,
    get_supabase_service,
)
from aribe.utils.logger import get_logger
from supabase import Client

logger = get_logger(__name__)

USERS_TABLE = "usuarios"

# Supabase Auth error codes -> mensagens para o usuário
AUTH_ERROR_MESSAGES: dict[str, str] = {
    "invalid_credentials": "Credenciais inválidas",
    "email_address_invalid": "E-mail inválido",
    "validation_failed": "E-mail inválido",
    "user_banned": "Usuário desabilitado",
    "user_not_found": "Usuário não encontrado",
    "over_request_rate_limit": "Muitas tentativas. Tente novamente mais tarde",
    "email_not_confirmed": "E-mail não confirmado",
}


def translate_auth_error(error: Exception) -> str:
    """Mensagem amigável para uma falha de login."""
    code = getattr(error, "code", None)
    if code in AUTH_ERROR_MESSAGES:
        return AUTH_ERROR_MESSAGES[code]
    return str(error) or "Erro ao fazer login"


class AuthService:
    """Login, sessão e perfil de acesso dos usuários."""

    def __init__(
        self,
        client: Client | None = None,
        session_client_factory: Callable[[], Client] = create_session_client,
    ) -> None:
        """Inicializa o serviço.

        Args:
            client: Cliente Supabase opcional, usado para perfis e tokens.
            session_client_factory: Cria o cliente descartável de cada login.
        """
        self.client = client or create_supabase_client()
        self.session_client_factory = session_client_factory

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Faz login com e-mail e senha.

        Args:
            email: E-mail do usuário.
            password: Senha.

        Returns:
            AuthResult com usuário e token, ou a mensagem de erro traduzida.
        """
        try:
            session_client = self.session_client_factory()
            response = session_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            message = translate_auth_error(e)
            logger.warning("login_failed", email=email, error=message)
            return AuthResult(success=False, error=message)

        user = response.user
        role = await self.get_role(user.id)
        logger.info("login_succeeded", user_id=user.id, role=role.name)

        return AuthResult(
            success=True,
            user=UserProfile(id=user.id, email=user.email, role=role),
            access_token=response.session.access_token if response.session else None,
        )

    async def sign_out(self, access_token: str) -> AuthResult:
        """Encerra a sessão do token informado."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.warning("logout_failed", error=str(e))
            return AuthResult(success=False, error=str(e) or "Erro ao fazer logout")

        logger.info("logout_succeeded")
        return AuthResult(success=True)

    async def get_user(self, access_token: str) -> UserProfile | None:
        """Resolve o usuário de um token de acesso.

        Returns:
            UserProfile com o perfil, ou None se o token for inválido.
        """
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.info("access_token_rejected", error=str(e))
            return None

        if response is None or response.user is None:
            return None

        user = response.user
        return UserProfile(id=user.id, email=user.email, role=await self.get_role(user.id))

    async def get_role(self, user_id: str) -> UserRole:
        """Busca o perfil do usuário.

        Perfil ausente ou falha na consulta resultam em usuário comum.
        """
        try:
            result = (
                self.client.table(USERS_TABLE)
                .select("role")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("role_lookup_failed", user_id=user_id, error=str(e))
            return UserRole.USER

        if not result.data:
            logger.info("role_not_found_defaulting", user_id=user_id)
            return UserRole.USER

        try:
            return UserRole(int(result.data[0]["role"]))
        except (KeyError, TypeError, ValueError):
            logger.warning("role_invalid", user_id=user_id, role=result.data[0])
            return UserRole.USER

    async def create_user(
        self, email: str, password: str, role: UserRole = UserRole.USER
    ) -> UserProfile:
        """Cria conta no Supabase Auth e a linha de perfil.

        Se o perfil falhar, a conta recém-criada é removida do Auth.

        Raises:
            CollaboratorError: Se a conta ou o perfil não puderem ser criados.
        """
        try:
            response = self.client.auth.admin.create_user(
                {"email": email, "password": password, "email_confirm": True}
            )
        except Exception as e:
            logger.error("user_create_failed", email=email, error=str(e))
            raise CollaboratorError("create_user", e) from e

        user = response.user
        try:
            await self.save_profile(user.id, email, role)
        except CollaboratorError:
            # Conta sem perfil não pode ficar no Auth
            try:
                self.client.auth.admin.delete_user(user.id)
            except Exception as e:
                logger.error("user_rollback_failed", user_id=user.id, error=str(e))
            else:
                logger.warning("user_rolled_back", user_id=user.id)
            raise

        return UserProfile(id=user.id, email=email, role=role)

    async def save_profile(self, user_id: str, email: str, role: UserRole) -> None:
        """Cria ou atualiza a linha em `usuarios`."""
        profile: dict[str, Any] = {"id": user_id, "email": email, "role": int(role)}
        try:
            self.client.table(USERS_TABLE).upsert(profile).execute()
        except Exception as e:
            logger.error("profile_save_failed", user_id=user_id, error=str(e))
            raise CollaboratorError("save_profile", e) from e

        logger.info("profile_saved", user_id=user_id, role=role.name)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Retorna ou cria instância global do serviço."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService(get_supabase_service().client)
    return _auth_service
