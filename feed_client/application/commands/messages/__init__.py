"""Post commands."""

from .create_post import CreatePostCommand, CreatePostHandler
from .edit_post import EditPostCommand, EditPostHandler
from .remove_post import RemovePostCommand, RemovePostHandler

__all__ = [
    "CreatePostCommand",
    "CreatePostHandler",
    "EditPostCommand",
    "EditPostHandler",
    "RemovePostCommand",
    "RemovePostHandler",
]
