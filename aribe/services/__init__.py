"""Services package - External service integrations."""

from aribe.services.auth import AuthService, get_auth_service
from aribe.services.supabase import SupabaseService, get_supabase_service
from aribe.services.whatsapp import MessageKind, build_whatsapp_link, normalize_phone

__all__ = [
    "AuthService",
    "get_auth_service",
    "SupabaseService",
    "get_supabase_service",
    "MessageKind",
    "build_whatsapp_link",
    "normalize_phone",
]
