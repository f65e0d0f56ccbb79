"""
Exceptions raised by the rules engine and the search.

All of them are precondition violations on the caller's side; nothing in
the core retries or recovers.
"""

from __future__ import annotations


class ConnectFourError(Exception):
    """Base class for connectfour errors."""


class IllegalMove(ConnectFourError, ValueError):
    """Drop into a full or out-of-range column, or undo from an empty one."""


class NoLegalMoves(ConnectFourError, ValueError):
    """Search was asked to move in a position that is already over."""


class NoMoveFound(ConnectFourError, RuntimeError):
    """Search finished without expanding a single child of the root."""
