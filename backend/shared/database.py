"""
Database client factory for Supabase.

The backend always talks to Supabase with the service role key: user and
product tables are not exposed through Row Level Security.
"""

from supabase import create_client, Client

from .config import Settings


def get_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client with service role (bypasses RLS).

    Args:
        settings: Application settings holding the Supabase URL and key

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase configuration is missing
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )
