# authservice

Building blocks for an OpenID Connect authentication service, written in
plain Python with no third-party dependencies.

## What is inside

- `authservice.httputil`
  - Header name and directive constants such as `AUTHORIZATION`,
    `SET_COOKIE` and `SET_COOKIE_HTTP_ONLY`.
  - Percent-encoding: `url_safe_encode` and `url_safe_decode`.
  - Query and form data: `encode_query_data`, `decode_query_data`,
    `encode_form_data` and `decode_form_data`. The encoders take a mapping
    or an iterable of pairs. The decoders return a list of `(key, value)`
    pairs sorted by key. In query strings the value of a `code` parameter
    may contain an unescaped `/`.
  - `encode_basic_auth` builds a Basic `Authorization` value.
  - `encode_set_cookie` builds a `Set-Cookie` value, with its directives
    deduplicated and sorted.
  - `decode_cookies` reads a `Cookie` header value. When a name appears
    more than once, the first value is kept.
  - `Uri` parses absolute `http`/`https` URIs into `scheme`, `host`,
    `port`, `path_query_fragment`, `path`, `query` and `fragment`.
    `PathQueryFragment` splits the part of a URI that follows the host.
  - Malformed input raises `DecodeError`, `UriError` or
    `UnsupportedSchemeError`. All three are subclasses of `ValueError`.
- `authservice.client`: `HttpClient`, a small blocking HTTP client.
  - `get` and `post` use TLS 1.2. A custom CA certificate and peer
    verification are set through `TransportSocketOptions`. Both can tunnel
    through an HTTP proxy given as `proxy_uri`.
  - `simple_get` uses plain TCP.
  - Each call returns a `Response` (`status`, `reason`, `headers`, `body`,
    `text`, `header()`). It returns `None` if anything fails, and the error
    is logged.
- `authservice.clock`: `TimeService.current_time_seconds()` gives whole
  seconds since the epoch. You can replace it in tests.
- `authservice.randomness`: `generate(size)` returns a `Random` built from
  secure random bytes.
  - `Random` values compare in constant time.
  - `str(random)` encodes the value as unpadded URL-safe base64, and
    `Random.from_string` reads it back. Malformed text raises `ValueError`.
- `authservice.session`: `SessionStringGenerator` makes session ids
  (64 bytes) and nonces and states (32 bytes each) as URL-safe strings.
- `authservice.trigger_rules`: `StringMatch`, `TriggerRule`, `match_string`
  and `trigger_rule_matches_path`. These decide whether a request path
  should be authenticated.
- `authservice.config`
  - `load_config(path)` reads a JSON configuration file. It merges each
    filter's `oidc_override` into `default_oidc_config` and validates every
    OIDC filter's URIs with `validate_all`, `validate_oidc_config` and
    `validate_uri`. It also lower-cases the `id_token.header` names.
  - Problems raise `ConfigError`.
  - `configured_log_level` returns a `LogLevel`. Its values match the
    numbers used by `logging`, and `TRACE` is 5.

## Examples

```python
from authservice.httputil import Uri, decode_query_data

uri = Uri("https://example.com:8443/callback?code=abc#top")
uri.host, uri.port, uri.path, uri.query, uri.fragment
# ('example.com', 8443, '/callback', 'code=abc', 'top')

decode_query_data("code=4/fod_AB8&state=abc%20123")
# [('code', '4/fod_AB8'), ('state', 'abc 123')]
```

```python
from authservice.trigger_rules import StringMatch, TriggerRule, trigger_rule_matches_path

rules = [TriggerRule(excluded_paths=[StringMatch(exact="/healthz")])]
trigger_rule_matches_path("/healthz", rules)  # False
trigger_rule_matches_path("/app", rules)      # True
```

```python
from authservice.session import SessionStringGenerator

generator = SessionStringGenerator()
generator.generate_session_id()  # 86 URL-safe characters
generator.generate_state()       # 43 URL-safe characters
```

## What it does not do

This package is a library. It contains:

- no authorization server or service to run;
- no command-line program;
- no filter chains or OIDC login flow;
- no session store;
- no JWKS fetching or token verification.

`load_config` checks only the URIs of OIDC filters. It does not check a
full configuration schema.

## Running the tests

```
pip install -e ".[test]"
pytest
```