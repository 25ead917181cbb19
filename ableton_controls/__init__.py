"""
Ableton Controls Package

Request/response access to Ableton Live via AbletonOSC.
"""

from .query_client import (
    AbletonQueryClient,
    ProjectInfo,
    QueryTimeout,
    ABLETON_RESPONSE_PORT,
)

__all__ = [
    'AbletonQueryClient',
    'ProjectInfo',
    'QueryTimeout',
    'ABLETON_RESPONSE_PORT',
]
