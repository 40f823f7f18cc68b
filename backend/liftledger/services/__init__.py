"""
Services module - Application business logic layer.

Modules:
- analytics: Day record normalization, statistics, PRs and leaderboards
"""
# Main exports for convenience
from liftledger.services.analytics import AnalyticsService, InMemoryRecordSource, RecordSource

__all__ = [
    "AnalyticsService",
    "InMemoryRecordSource",
    "RecordSource",
]
