# simplytrack/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token as _create_access

from simplytrack.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    ``iss``/``aud`` stamping comes from the ``JWT_ENCODE_*`` settings, which
    :func:`simplytrack.core.tokens.init_app` derives from the application's
    :class:`~simplytrack.services.auth.dto.AuthTokenConfig`. The matching
    ``JWT_DECODE_*`` settings are applied by ``verify_jwt_in_request``.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return cast(
            str,
            _create_access(
                identity=identity,
                additional_claims=additional_claims or {},
                expires_delta=expires_delta,
            ),
        )
