"""
Remote Browser Module

Scoped CDP sessions against an already running Chrome.
"""

from .session import RemoteSession, open_session

__all__ = [
    "RemoteSession",
    "open_session",
]
