"""Feed and post queries."""

from .list_feed import ListFeedQuery, ListFeedHandler
from .list_account_posts import ListAccountPostsQuery, ListAccountPostsHandler
from .get_post import GetPostQuery, GetPostHandler

__all__ = [
    "ListFeedQuery",
    "ListFeedHandler",
    "ListAccountPostsQuery",
    "ListAccountPostsHandler",
    "GetPostQuery",
    "GetPostHandler",
]
