"""Authentication commands."""

from .login import LoginCommand, LoginHandler
from .logout import LogoutCommand, LogoutHandler
from .register import RegisterCommand, RegisterHandler

__all__ = [
    "LoginCommand",
    "LoginHandler",
    "LogoutCommand",
    "LogoutHandler",
    "RegisterCommand",
    "RegisterHandler",
]
