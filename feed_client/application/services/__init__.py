"""
Application services - state owned by the client process.

- session.py           → the single authenticated account slot
- feed_synchronizer.py → the authoritative feed snapshot and refresh policy
"""

from feed_client.application.services.session import Session
from feed_client.application.services.feed_synchronizer import FeedSynchronizer, sort_feed

__all__ = [
    "Session",
    "FeedSynchronizer",
    "sort_feed",
]
