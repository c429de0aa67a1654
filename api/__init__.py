"""
API package for the Workout Session API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: Pydantic request models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    create_user_client,
    get_request_client,
    get_session_repo,
    get_session_analytics_repo,
    get_track_session_use_case,
    get_user_progress_use_case,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    "create_user_client",
    "get_request_client",
    # Repositories
    "get_session_repo",
    "get_session_analytics_repo",
    # Use cases
    "get_track_session_use_case",
    "get_user_progress_use_case",
    # Authentication
    "get_current_user",
]
