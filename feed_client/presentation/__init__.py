"""
Presentation Layer - The operation set exposed to the UI.

Forms, routing and notifications live outside this package and call only
FeedClient.
"""

from feed_client.presentation.feed_client import FeedClient, open_feed_client

__all__ = [
    "FeedClient",
    "open_feed_client",
]
