"""Random identifiers for sessions and OIDC authorization requests."""

from __future__ import annotations

from authservice.randomness import generate


class SessionStringGenerator:
    """Produces session ids, nonces and states as web-safe strings."""

    def generate_session_id(self) -> str:
        return self._generate_random_string(64)

    def generate_nonce(self) -> str:
        return self._generate_random_string(32)

    def generate_state(self) -> str:
        return self._generate_random_string(32)

    def _generate_random_string(self, size: int) -> str:
        return str(generate(size))