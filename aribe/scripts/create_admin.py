"""Admin Bootstrap Script - Create the administrator account.

Run once per environment:

    python -m aribe.scripts.create_admin

Uses ADMIN_EMAIL / ADMIN_PASSWORD and the Supabase service key from .env.
"""

import asyncio

from aribe.config.settings import get_settings
from aribe.contracts.user import UserRole
from aribe.core.errors import CollaboratorError
from aribe.services.auth import AuthService


async def create_admin() -> bool:
    settings = get_settings()

    if not settings.supabase_service_key:
        print("[ERROR] SUPABASE_SERVICE_KEY not set (admin API requires it).")
        return False
    if not settings.admin_password:
        print("[ERROR] ADMIN_PASSWORD not set.")
        return False

    print(f"[INFO] Creating administrator {settings.admin_email}...")
    auth = AuthService()

    try:
        user = await auth.create_user(
            settings.admin_email,
            settings.admin_password,
            role=UserRole.ADMIN,
        )
    except CollaboratorError as e:
        print(f"[ERROR] {e.message}")
        return False

    print(f"[SUCCESS] Administrator created (UID: {user.id}).")
    print("   You can now log in with these credentials.")
    return True


if __name__ == "__main__":
    asyncio.run(create_admin())
