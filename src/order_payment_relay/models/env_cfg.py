from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

SANDBOX_BASE_URL = "https://api-m.sandbox.paypal.com"
DEFAULT_PORT = 8888
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    """Client-credential pair used for the OAuth token exchange."""
    client_id: str = ""
    client_secret: str = ""

    def is_complete(self) -> bool:
        return bool(self.client_id) and bool(self.client_secret)

    def __repr__(self) -> str:
        # keep the secret out of logs and tracebacks
        return f"Credentials(client_id={self.client_id!r}, client_secret='***')"


@dataclass(frozen=True)
class EnvCfg:
    """Immutable process configuration returned by get_app_env()."""
    PAYPAL_CLIENT_ID: str = ""
    PAYPAL_CLIENT_SECRET: str = ""
    PAYPAL_BASE_URL: str = SANDBOX_BASE_URL
    PORT: int = DEFAULT_PORT
    PAYPAL_HTTP_TIMEOUT: Optional[float] = DEFAULT_HTTP_TIMEOUT

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.PAYPAL_CLIENT_ID, self.PAYPAL_CLIENT_SECRET)

    def __repr__(self) -> str:
        return (
            f"EnvCfg(PAYPAL_CLIENT_ID={self.PAYPAL_CLIENT_ID!r}, "
            f"PAYPAL_BASE_URL={self.PAYPAL_BASE_URL!r}, PORT={self.PORT!r}, "
            f"PAYPAL_HTTP_TIMEOUT={self.PAYPAL_HTTP_TIMEOUT!r})"
        )
