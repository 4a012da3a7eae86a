"""Access-token claim checks applied after the token itself has been verified."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from simplytrack.services._shared.errors import UnauthorizedError
from simplytrack.services.auth.dto import Principal

ACCESS_TOKEN_TYPE = "access"


class TokenAuthenticator:
    """
    Turn the claims of a verified access token into the calling principal.

    Signature, ``exp``/``nbf`` (with the configured leeway), issuer, audience
    and the denylist are enforced by ``flask-jwt-extended`` before the claims
    reach this class (see :func:`simplytrack.api.deps.require_auth`). What is
    left here is the token type and the claims the API relies on.
    """

    def principal(self, claims: Mapping[str, Any]) -> Principal:
        """
        Return the caller described by ``claims``.

        :param claims: Decoded payload of a verified token.
        :type claims: Mapping[str, Any]
        :returns: Subject, ``jti`` and expiry of the token.
        :rtype: Principal
        :raises UnauthorizedError: If the token is not an access token or
            lacks ``sub``/``jti``/``exp``.
        """
        if claims.get("type") != ACCESS_TOKEN_TYPE:
            raise UnauthorizedError("Access token required.")

        subject = claims.get("sub")
        jti = claims.get("jti")
        exp = claims.get("exp")
        if not isinstance(subject, str) or not subject or not jti or exp is None:
            raise UnauthorizedError("Malformed access token.")

        return Principal(
            user_id=subject,
            jti=str(jti),
            expires_at=datetime.fromtimestamp(int(exp), tz=timezone.utc),
        )
