"""Error taxonomy for the interactive session.

Everything except ``DaemonUnreachable`` is recoverable inside the session:
the state machine catches it, optionally appends a status row, and carries on.
"""

from __future__ import annotations


class TockerError(Exception):
    """Base class for all tocker errors."""


class UnboundKey(TockerError):
    """A key with no binding in the active context."""

    def __init__(self, key_label: str) -> None:
        super().__init__(f"Invalid key {key_label}: press only the available keys")
        self.key_label = key_label


class NotAuthorized(TockerError):
    """A (kind, command) pair that the authorization table rejects."""

    def __init__(self, kind_token: str, command_token: str) -> None:
        super().__init__(f"Command '{command_token}' is not available for {kind_token}")
        self.kind_token = kind_token
        self.command_token = command_token


class InvalidEventSource(TockerError):
    """Terminal input that is not a key press."""


class UserCancelled(TockerError):
    """The user aborted the current cycle."""


class SubprocessFailure(TockerError):
    """The external command failed, timed out, or produced undecodable output."""


class DaemonUnreachable(TockerError):
    """The startup status probe failed."""


class QuitRequested(Exception):
    """Raised by the QUIT action to unwind the session loop."""
