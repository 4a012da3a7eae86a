"""
simplytrack.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) that define the contracts
for token handling infrastructure.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for signing and
    verifying access tokens.

- :mod:`denylist_store`:
    Defines :class:`~.TokenDenylistStore`, the early-revocation store for
    access tokens, plus an in-process implementation.

Design Notes
------------
Concrete adapters (Flask-JWT-Extended, Redis) live under
``simplytrack.infra`` so the service layer never imports them.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .token_provider import TokenProvider

__all__ = [
    "TokenProvider",
    "TokenDenylistStore",
    "InMemoryDenylistStore",
]
