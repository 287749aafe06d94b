"""Loading and validation of the service's JSON configuration."""

from __future__ import annotations

import copy
import enum
import json
from os import PathLike
from typing import Any

from authservice.httputil import UnsupportedSchemeError, Uri, UriError


class ConfigError(ValueError):
    """Raised when the configuration cannot be loaded or is invalid."""


class LogLevel(enum.IntEnum):
    """Log levels the configuration may select, aligned with logging's numbers."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    ERROR = 40
    CRITICAL = 50


_LOG_LEVELS = {
    "": LogLevel.TRACE,
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "error": LogLevel.ERROR,
    "critical": LogLevel.CRITICAL,
}


def _filters(config: dict[str, Any]):
    for chain in config.get("chains") or []:
        yield from chain.get("filters") or []


def validate_uri(uri: str, uri_type: str, required_scheme: str) -> None:
    """Check uri parses, has no query or fragment, and uses required_scheme."""
    try:
        parsed = Uri(uri)
    except UnsupportedSchemeError as exc:
        raise ConfigError(
            f"invalid {uri_type}: uri must be {required_scheme} scheme: {uri}"
        ) from exc
    except UriError as exc:
        raise ConfigError(f"invalid {uri_type}: {exc}") from exc
    if parsed.has_query or parsed.has_fragment:
        raise ConfigError(
            f"invalid {uri_type}: query params and fragments not allowed: {uri}"
        )
    if parsed.scheme != required_scheme:
        raise ConfigError(
            f"invalid {uri_type}: uri must be {required_scheme} scheme: {uri}"
        )


def validate_oidc_config(config: dict[str, Any]) -> None:
    """Check the endpoint URIs of one OIDC filter configuration."""
    for name in ("authorization_uri", "callback_uri", "token_uri"):
        validate_uri(config.get(name, ""), name, "https")
    proxy_uri = config.get("proxy_uri", "")
    if proxy_uri:
        validate_uri(proxy_uri, "proxy_uri", "http")


def validate_all(config: dict[str, Any]) -> None:
    """Validate every filter of every chain."""
    if not isinstance(config, dict):
        raise ConfigError("configuration must be a JSON object")
    for filter_config in _filters(config):
        if "oidc_override" in filter_config:
            raise ConfigError("oidc_override must be resolved before validation")
        if "mock" in filter_config:
            continue
        if "oidc" in filter_config:
            validate_oidc_config(filter_config["oidc"])
            continue
        raise ConfigError("filter must define either mock or oidc")


def configured_log_level(config: dict[str, Any]) -> LogLevel:
    """The log level named by the configuration; trace when unset."""
    name = config.get("log_level", "")
    try:
        return _LOG_LEVELS[name]
    except (KeyError, TypeError):
        raise ConfigError(
            f"Unexpected log_level config '{name}': must be one of "
            "[trace, debug, info, error, critical]"
        ) from None


def _is_unset(value: Any) -> bool:
    return value is None or (not isinstance(value, (dict, list)) and not value)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Merge source into target: objects recursively, lists appended, scalars replaced."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        elif isinstance(value, list) and isinstance(target.get(key), list):
            target[key].extend(copy.deepcopy(value))
        elif not _is_unset(value):
            target[key] = copy.deepcopy(value)


def load_config(path: str | PathLike[str]) -> dict[str, Any]:
    """Read, resolve overrides in, validate and normalise a configuration file."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError("failed to open filter config") from exc
    try:
        config = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(str(exc)) from exc
    if not isinstance(config, dict):
        raise ConfigError("configuration must be a JSON object")

    default_oidc = config.get("default_oidc_config")
    for filter_config in _filters(config):
        override = filter_config.pop("oidc_override", None)
        if override is None:
            continue
        if default_oidc is None:
            raise ConfigError("oidc_config must be utilized with default_oidc_config")
        merged = copy.deepcopy(default_oidc)
        _merge(merged, override)
        filter_config.pop("mock", None)
        filter_config["oidc"] = merged
    config.pop("default_oidc_config", None)

    validate_all(config)

    for filter_config in _filters(config):
        id_token = filter_config.get("oidc", {}).get("id_token")
        if isinstance(id_token, dict) and "header" in id_token:
            id_token["header"] = id_token["header"].lower()
    return config