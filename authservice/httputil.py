"""HTTP helpers: header names, percent-encoding, query/form/cookie codecs and URI parsing."""

from __future__ import annotations

import base64
import re
import string
from collections.abc import Callable, Iterable, Mapping

# Standard HTTP header names.
AUTHORIZATION = "authorization"
COOKIE = "cookie"
CACHE_CONTROL = "cache-control"
CONTENT_TYPE = "content-type"
LOCATION = "location"
PRAGMA = "pragma"
SET_COOKIE = "set-cookie"

# Header directives.
CACHE_CONTROL_NO_CACHE = "no-cache"
CONTENT_TYPE_FORM_URL_ENCODED = "application/x-www-form-urlencoded"
PRAGMA_NO_CACHE = "no-cache"
SET_COOKIE_SECURE = "Secure"
SET_COOKIE_HTTP_ONLY = "HttpOnly"
SET_COOKIE_SAME_SITE_STRICT = "SameSite=Strict"
SET_COOKIE_SAME_SITE_LAX = "SameSite=Lax"
SET_COOKIE_MAX_AGE = "Max-Age"

_HEX_DIGITS = "0123456789ABCDEF"

# Unreserved characters of RFC 3986.
_URL_SAFE = frozenset(string.ascii_letters + string.digits + "-_.~")
_FORM_SAFE = _URL_SAFE | {"+"}
# Authorization codes may carry any printable character, "/" included
# (RFC 6749, appendix A.11), and some providers do send it unescaped.
_OIDC_CODE_SAFE = _URL_SAFE | {"/"}

_PORT_PATTERN = re.compile(r"\s*([+-]?\d+)")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


class DecodeError(ValueError):
    """Raised when encoded HTTP data cannot be decoded."""


class UriError(ValueError):
    """Raised when a URI cannot be parsed."""


class UnsupportedSchemeError(UriError):
    """Raised when a URI is neither http nor https."""


Pairs = Mapping[str, str] | Iterable[tuple[str, str]]


def _safe_encode(text: str, safe: frozenset[str]) -> str:
    out = []
    for byte in text.encode("utf-8"):
        char = chr(byte)
        if char in safe:
            out.append(char)
        else:
            out.append(f"%{_HEX_DIGITS[byte >> 4]}{_HEX_DIGITS[byte & 0x0F]}")
    return "".join(out)


def _hex_value(char: str | None) -> int:
    index = _HEX_DIGITS.find(char) if char else -1
    if index < 0:
        raise DecodeError(f"invalid percent-encoding digit: {char!r}")
    return index


def _safe_decode(text: str, safe: frozenset[str]) -> str:
    out = bytearray()
    chars = iter(text)
    for char in chars:
        if char in safe:
            out += char.encode("ascii")
            continue
        if char != "%":
            raise DecodeError(f"unexpected character {char!r} in {text!r}")
        high = _hex_value(next(chars, None))
        low = _hex_value(next(chars, None))
        out.append((high << 4) | low)
    try:
        return out.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"decoded data is not valid UTF-8: {text!r}") from exc


def _sorted_pairs(data: Pairs) -> list[tuple[str, str]]:
    items = data.items() if isinstance(data, Mapping) else data
    return sorted(items, key=lambda pair: pair[0])


def _split_pair(part: str) -> tuple[str, str]:
    pieces = part.split("=")
    if len(pieces) != 2:
        raise DecodeError(f"expected a single key=value pair: {part!r}")
    return pieces[0], pieces[1]


def url_safe_encode(url: str) -> str:
    """Percent-encode everything except unreserved characters."""
    return _safe_encode(url, _URL_SAFE)


def url_safe_decode(url: str) -> str:
    """Reverse url_safe_encode; raise DecodeError on malformed input."""
    return _safe_decode(url, _URL_SAFE)


def encode_query_data(data: Pairs) -> str:
    """Encode key/value pairs, ordered by key, as a query string."""
    return "&".join(
        f"{_safe_encode(key, _URL_SAFE)}={_safe_encode(value, _URL_SAFE)}"
        for key, value in _sorted_pairs(data)
    )


def decode_query_data(query: str) -> list[tuple[str, str]]:
    """Decode a query string into key/value pairs ordered by key."""
    result = []
    for part in query.split("&"):
        raw_key, raw_value = _split_pair(part)
        key = _safe_decode(raw_key, _URL_SAFE)
        value_safe = _OIDC_CODE_SAFE if raw_key == "code" else _URL_SAFE
        result.append((key, _safe_decode(raw_value, value_safe)))
    return _sorted_pairs(result)


def encode_form_data(data: Pairs) -> str:
    """Encode key/value pairs, ordered by key, as form data."""
    return "&".join(
        f"{_safe_encode(key.replace(' ', '+'), _FORM_SAFE)}"
        f"={_safe_encode(value.replace(' ', '+'), _FORM_SAFE)}"
        for key, value in _sorted_pairs(data)
    )


def decode_form_data(form: str) -> list[tuple[str, str]]:
    """Decode form data into key/value pairs ordered by key."""
    result = []
    for part in form.split("&"):
        raw_key, raw_value = _split_pair(part)
        key = _safe_decode(raw_key, _FORM_SAFE).replace("+", " ")
        value = _safe_decode(raw_value, _FORM_SAFE).replace("+", " ")
        result.append((key, value))
    return _sorted_pairs(result)


def encode_basic_auth(username: str, password: str) -> str:
    """Build a Basic Authorization header value (RFC 7617)."""
    credentials = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


def encode_set_cookie(name: str, value: str, directives: Iterable[str]) -> str:
    """Build a Set-Cookie value; directives are deduplicated and sorted."""
    return "; ".join([f"{name}={value}", *sorted(set(directives))])


def decode_cookies(cookies: str) -> dict[str, str]:
    """Decode a Cookie header value; the first of duplicate names wins."""
    result: dict[str, str] = {}
    for cookie in cookies.split("; "):
        name, sep, value = cookie.partition("=")
        if not sep:
            raise DecodeError(f"cookie must be name=value: {cookie!r}")
        result.setdefault(name, value)
    return result


class PathQueryFragment:
    """The path, query and fragment parts of a URI reference."""

    __slots__ = ("path", "query", "fragment")

    def __init__(self, path_query_fragment: str) -> None:
        before_fragment, _, self.fragment = path_query_fragment.partition("#")
        self.path, _, self.query = before_fragment.partition("?")

    @property
    def has_query(self) -> bool:
        return bool(self.query)

    @property
    def has_fragment(self) -> bool:
        return bool(self.fragment)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathQueryFragment):
            return NotImplemented
        return (self.path, self.query, self.fragment) == (
            other.path,
            other.query,
            other.fragment,
        )

    def __repr__(self) -> str:
        return (
            f"PathQueryFragment(path={self.path!r}, query={self.query!r}, "
            f"fragment={self.fragment!r})"
        )


def _parse_port(text: str, uri: str) -> int:
    match = _PORT_PATTERN.match(text)
    if match is None:
        raise UriError(f"port not valid in uri: {uri}")
    port = int(match.group(1))
    if not _INT32_MIN <= port <= _INT32_MAX:
        raise UriError(f"port not valid in uri: {uri}")
    if not 0 <= port <= 65535:
        raise UriError(f"port value must be between 0 and 65535: {uri}")
    return port


class Uri:
    """An absolute http or https URI split into its components."""

    _PREFIXES = (("https", "https://"), ("http", "http://"))
    _DEFAULT_PORTS = {"http": 80, "https": 443}

    def __init__(self, uri: str) -> None:
        for scheme, prefix in self._PREFIXES:
            if uri.startswith(prefix):
                break
        else:
            raise UnsupportedSchemeError(f"uri must be http or https scheme: {uri}")
        if len(uri) == len(prefix):
            raise UriError(f"no host in uri: {uri}")
        self.scheme = scheme

        rest = uri[len(prefix):]
        end = min(
            (pos for pos in (rest.find(c) for c in "/?#") if pos != -1),
            default=len(rest),
        )
        host_and_port = rest[:end]
        path_query_fragment = rest[end:]
        if not path_query_fragment.startswith("/"):
            path_query_fragment = "/" + path_query_fragment
        self.path_query_fragment = path_query_fragment
        self._parts = PathQueryFragment(path_query_fragment)

        host, colon, port_text = host_and_port.partition(":")
        if colon and not host:
            raise UriError(f"no host in uri: {uri}")
        self.host = host
        self.port = (
            _parse_port(port_text, uri) if colon else self._DEFAULT_PORTS[scheme]
        )

    @property
    def path(self) -> str:
        return self._parts.path

    @property
    def query(self) -> str:
        return self._parts.query

    @property
    def fragment(self) -> str:
        return self._parts.fragment

    @property
    def has_query(self) -> bool:
        return self._parts.has_query

    @property
    def has_fragment(self) -> bool:
        return self._parts.has_fragment

    def __repr__(self) -> str:
        return (
            f"Uri(scheme={self.scheme!r}, host={self.host!r}, port={self.port!r}, "
            f"path_query_fragment={self.path_query_fragment!r})"
        )