"""
Infrastructure Database Layer.

Supabase-backed implementations of the repository interfaces defined in
application.ports. The session repository is bound to the authenticated
user so it can refuse to start sessions on behalf of anyone else.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseWorkoutSessionRepository,
        SupabaseSessionAnalyticsRepository,
    )

    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    session_repo = SupabaseWorkoutSessionRepository(client, current_user_id="user_123")
    analytics_repo = SupabaseSessionAnalyticsRepository(client)
"""

from infrastructure.db.session_repository import SupabaseWorkoutSessionRepository
from infrastructure.db.session_analytics_repository import (
    SupabaseSessionAnalyticsRepository,
)

__all__ = [
    # Session lifecycle and logging
    "SupabaseWorkoutSessionRepository",

    # Progress analytics
    "SupabaseSessionAnalyticsRepository",
]
