"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (``run_app``) and the
state machine used by tests and composition code.
"""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import the session entrypoint to keep package imports lightweight."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


__all__ = ["run_app"]
