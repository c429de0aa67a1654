"""
FastAPI Dependency Providers for the Workout Session API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and the service-role Supabase client are cached per-process (lru_cache)
- Requests authenticated with a Supabase access token get their own anon-key
  client carrying that token, so row-level security applies to every query
- Requests authenticated with an API key use the service-role client; the
  repository ownership checks are the only guard on that path
- Repository providers create new instances per-request
- The session repository is bound to the authenticated user
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_track_session_use_case, get_current_user
    from application.use_cases import TrackSessionUseCase

    @router.get("/sessions/active")
    def active_session(
        user_id: str = Depends(get_current_user),
        use_case: TrackSessionUseCase = Depends(get_track_session_use_case),
    ):
        return use_case.get_active_session(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeWorkoutSessionRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    SessionAnalyticsRepository,
    WorkoutSessionRepository,
)
from application.use_cases import (
    GetUserProgressUseCase,
    TrackSessionUseCase,
)

# Concrete implementations
from infrastructure import (
    SupabaseSessionAnalyticsRepository,
    SupabaseWorkoutSessionRepository,
)

from backend.settings import Settings, get_settings as _get_settings

# Auth (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get the service-role Supabase client instance (cached).

    This client bypasses row-level security. It is only handed to requests
    authenticated with an API key.
    Returns None if the URL or service role key is not configured.

    Note: This function is cached for the lifetime of the process.
    Clear with get_supabase_client.cache_clear() in tests.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_service_role_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


def create_user_client(access_token: str) -> Client:
    """
    Create a Supabase client that acts as the token's user.

    The client uses the anon key and sends ``access_token`` with every
    PostgREST request, so ``auth.uid()`` in the RLS policies is the caller.

    Raises:
        HTTPException: 503 if the URL or anon key is not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_anon_key:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase anon key not configured.",
        )

    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(access_token)
    return client


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.
    Supports:
    - Supabase access tokens (HS256)
    - API key authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


def get_request_client(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    user_id: str = Depends(get_current_user),
) -> Client:
    """
    Get the Supabase client for the current request.

    Resolves authentication first so missing credentials are a 401 even
    when the database is not configured. Mirrors the precedence of
    get_current_user: an API key wins over a bearer token.

    - Bearer token: a new anon-key client carrying the caller's token
    - API key: the cached service-role client
    """
    if authorization and not x_api_key:
        access_token = authorization.split(" ", 1)[1]
        return create_user_client(access_token)

    return get_supabase_client_required()


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_request_client),
    user_id: str = Depends(get_current_user),
) -> WorkoutSessionRepository:
    """
    Get WorkoutSessionRepository implementation.

    Returns a SupabaseWorkoutSessionRepository bound to the current user.

    Args:
        client: Supabase client (injected)
        user_id: Current user ID (injected from auth)

    Returns:
        WorkoutSessionRepository: Repository for session lifecycle and logs
    """
    return SupabaseWorkoutSessionRepository(client, current_user_id=user_id)


def get_session_analytics_repo(
    client: Client = Depends(get_request_client),
) -> SessionAnalyticsRepository:
    """
    Get SessionAnalyticsRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        SessionAnalyticsRepository: Repository for progress analytics
    """
    return SupabaseSessionAnalyticsRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_track_session_use_case(
    session_repo: WorkoutSessionRepository = Depends(get_session_repo),
) -> TrackSessionUseCase:
    """Get TrackSessionUseCase with the request-scoped session repository."""
    return TrackSessionUseCase(session_repo=session_repo)


def get_user_progress_use_case(
    session_repo: WorkoutSessionRepository = Depends(get_session_repo),
) -> GetUserProgressUseCase:
    """Get GetUserProgressUseCase with the request-scoped session repository."""
    return GetUserProgressUseCase(session_repo=session_repo)


# =============================================================================
# Exports
# =============================================================================

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
