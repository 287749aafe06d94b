"""Building blocks for an OIDC authentication service: HTTP codecs, URI parsing, an HTTPS client, random session strings, trigger rules and configuration loading."""

__version__ = "0.1.0"