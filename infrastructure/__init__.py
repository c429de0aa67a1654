"""
Infrastructure Layer for the Workout Session API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseWorkoutSessionRepository,
    SupabaseSessionAnalyticsRepository,
)

__all__ = [
    "SupabaseWorkoutSessionRepository",
    "SupabaseSessionAnalyticsRepository",
]
