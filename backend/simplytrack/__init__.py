"""SimplyTrack workout-logging API.

Provide convenient access to :func:`simplytrack.factory.create_app` so callers
can ``from simplytrack import create_app``.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
