"""
Domain services for the sponsorship platform.
"""

from .audit_service import AuditLogService
from .timeline_service import (
    AUDIT_ACTION_TIMELINE,
    TimelineBuilder,
    calculate_progress,
    calculate_stats,
    deduplicate,
    map_audit_action,
    sort_chronologically,
)

__all__ = [
    "AuditLogService",
    "AUDIT_ACTION_TIMELINE",
    "TimelineBuilder",
    "calculate_progress",
    "calculate_stats",
    "deduplicate",
    "map_audit_action",
    "sort_chronologically",
]
