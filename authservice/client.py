"""A small blocking HTTP client used to talk to identity providers."""

from __future__ import annotations

import http.client
import logging
import ssl
from collections.abc import Mapping
from contextlib import closing
from dataclasses import dataclass, field

from authservice.httputil import Uri

logger = logging.getLogger(__name__)

_CERT_ALREADY_LOADED = "CERT_ALREADY_IN_HASH_TABLE"
_METHODS_WITH_BODY = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class TransportSocketOptions:
    """TLS settings for an outgoing request."""

    ca_cert: str = ""
    """A certificate authority to trust, in PEM format."""
    verify_peer: bool = True
    """Whether the server certificate is validated."""


@dataclass
class Response:
    """An HTTP response with its body read in full."""

    status: int
    reason: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first header with the given name, ignoring case."""
        wanted = name.lower()
        return next(
            (value for key, value in self.headers if key.lower() == wanted), default
        )


class HttpClient:
    """Sends single requests and returns the response, or None on any failure."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def post(
        self,
        uri: str,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
        options: TransportSocketOptions = TransportSocketOptions(),
        proxy_uri: str = "",
    ) -> Response | None:
        """Send a POST over TLS, optionally tunnelled through an HTTP proxy."""
        return self._guarded(
            "post",
            lambda: self._tls_request(
                "POST", uri, headers, body, options, proxy_uri, tolerate_loaded_ca=True
            ),
        )

    def get(
        self,
        uri: str,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
        options: TransportSocketOptions = TransportSocketOptions(),
        proxy_uri: str = "",
    ) -> Response | None:
        """Send a GET over TLS, optionally tunnelled through an HTTP proxy."""
        return self._guarded(
            "get",
            lambda: self._tls_request(
                "GET", uri, headers, body, options, proxy_uri, tolerate_loaded_ca=False
            ),
        )

    def simple_get(
        self,
        uri: str,
        headers: Mapping[str, str] | None = None,
        body: str | bytes = b"",
    ) -> Response | None:
        """Send a GET over a plain TCP connection."""

        def run() -> Response:
            parsed = Uri(uri)
            logger.info("simple_get: opening connection to %s:%s", parsed.host, parsed.port)
            conn = http.client.HTTPConnection(
                parsed.host, parsed.port, timeout=self.timeout
            )
            return self._exchange(conn, "GET", parsed, headers, body)

        return self._guarded("simple_get", run)

    @staticmethod
    def _guarded(name: str, action) -> Response | None:
        try:
            return action()
        except Exception as exc:  # any failure yields no response
            logger.error("%s: unexpected exception: %s", name, exc)
            return None

    def _tls_request(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str] | None,
        body: str | bytes,
        options: TransportSocketOptions,
        proxy_uri: str,
        *,
        tolerate_loaded_ca: bool,
    ) -> Response:
        context = _ssl_context(options, tolerate_loaded_ca)
        parsed = Uri(uri)
        if proxy_uri:
            proxy = Uri(proxy_uri)
            logger.info(
                "%s: opening connection to proxy %s for request to destination %s:%s",
                method.lower(),
                proxy_uri,
                parsed.host,
                parsed.port,
            )
            conn = http.client.HTTPSConnection(
                proxy.host, proxy.port, timeout=self.timeout, context=context
            )
            conn.set_tunnel(parsed.host, parsed.port)
        else:
            logger.info(
                "%s: opening connection to %s:%s", method.lower(), parsed.host, parsed.port
            )
            conn = http.client.HTTPSConnection(
                parsed.host, parsed.port, timeout=self.timeout, context=context
            )
        return self._exchange(conn, method, parsed, headers, body)

    @staticmethod
    def _exchange(
        conn: http.client.HTTPConnection,
        method: str,
        parsed: Uri,
        headers: Mapping[str, str] | None,
        body: str | bytes,
    ) -> Response:
        payload = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        merged: dict[str, tuple[str, str]] = {"host": ("Host", parsed.host)}
        for name, value in (headers or {}).items():
            merged[name.lower()] = (name, value)
        if payload or method in _METHODS_WITH_BODY:
            merged["content-length"] = ("Content-Length", str(len(payload)))
        else:
            merged.pop("content-length", None)

        with closing(conn):
            conn.putrequest(
                method,
                parsed.path_query_fragment,
                skip_host=True,
                skip_accept_encoding=True,
            )
            for name, value in merged.values():
                conn.putheader(name, value)
            conn.endheaders(payload or None)
            reply = conn.getresponse()
            data = reply.read()
            logger.debug("closing connection, response payload size %d", len(data))
            return Response(
                status=reply.status,
                reason=reply.reason,
                headers=reply.getheaders(),
                body=data,
            )


def _ssl_context(options: TransportSocketOptions, tolerate_loaded_ca: bool) -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.maximum_version = ssl.TLSVersion.TLSv1_2
    if not options.verify_peer:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    context.load_default_certs()
    if options.ca_cert:
        logger.info("Trusting the provided certificate authority")
        try:
            context.load_verify_locations(cadata=options.ca_cert)
        except ssl.SSLError as exc:
            if not (tolerate_loaded_ca and exc.reason == _CERT_ALREADY_LOADED):
                raise
    return context