"""Reverse-proxy awareness and client address resolution."""

from __future__ import annotations

from flask import Flask, Request
from werkzeug.middleware.proxy_fix import ProxyFix

FORWARDED_FOR_HEADER = "X-Forwarded-For"


def init_app(app: Flask) -> None:
    """Apply :class:`werkzeug.middleware.proxy_fix.ProxyFix` when enabled.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline should respect upstream proxy headers.

    Notes
    -----
    Controlled by the ``USE_PROXYFIX`` configuration flag (defaults to
    ``True``). ``PROXYFIX_HOPS`` sets how many proxies are trusted for the
    ``X-Forwarded-*`` headers (one by default).
    """
    if app.config.get("USE_PROXYFIX", True):
        hops = int(app.config.get("PROXYFIX_HOPS", 1))
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops
        )


def client_ip(req: Request) -> str | None:
    """Return the originating client address for audit columns.

    The first entry of ``X-Forwarded-For`` wins; otherwise the peer address
    (already rewritten by ``ProxyFix`` when enabled) is used.

    :param req: Current Flask request.
    :type req: flask.Request
    :returns: Client IP string, or ``None`` when unknown.
    :rtype: str | None
    """
    forwarded = req.headers.get(FORWARDED_FOR_HEADER, "")
    first = forwarded.split(",")[0].strip() if forwarded else ""
    if first:
        return first
    return req.remote_addr or None
