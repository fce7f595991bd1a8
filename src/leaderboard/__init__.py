"""
Leaderboard - client side of CV scoring.

Keeps jobs and per-job leaderboards in a local key-value store and sends
CVs to the analysis API.
"""

from .api_client import AnalyzeClient, AnalyzeRequestError
from .session import ViewMode, ViewSession, ViewStateError
from .store import JsonFileRepository, KeyValueRepository, MemoryRepository, StateStore

__all__ = [
    "AnalyzeClient",
    "AnalyzeRequestError",
    "ViewMode",
    "ViewSession",
    "ViewStateError",
    "JsonFileRepository",
    "KeyValueRepository",
    "MemoryRepository",
    "StateStore",
]
