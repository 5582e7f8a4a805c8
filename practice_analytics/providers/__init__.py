from .base import ProviderBase
from .fallback_provider import FallbackProvider
from .supabase_provider import SupabaseNotConfiguredError, SupabaseProvider

__all__ = [
    "ProviderBase",
    "FallbackProvider",
    "SupabaseProvider",
    "SupabaseNotConfiguredError",
]
