from __future__ import annotations

from typing import Optional
import logging

from requests.auth import HTTPBasicAuth

from order_payment_relay.models import Credentials
from .errors import AuthenticationFailed, InvalidResponse, MissingCredentials
from .transport import RequestsTransport


class TokenProvider:
    """OAuth2 client-credentials exchange against the processor.

    A new token is requested on every call; nothing is cached, so concurrent
    requests each perform their own exchange.
    """

    TOKEN_PATH = "/v1/oauth2/token"

    def __init__(
        self,
        credentials: Credentials,
        base_url: str,
        transport: Optional[RequestsTransport] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.transport = transport or RequestsTransport()
        self.logger: logging.Logger = logger or logging.getLogger(
            "order_payment_relay.api.auth"
        )

    @property
    def token_url(self) -> str:
        return self.base_url + self.TOKEN_PATH

    def generate_access_token(self) -> str:
        """Return a fresh bearer token.

        Raises MissingCredentials before touching the network when either half
        of the credential pair is empty, AuthenticationFailed on any non-200
        answer and TransportError when the processor cannot be reached.
        """
        if not self.credentials.is_complete():
            self.logger.error("Failed to generate Access Token: missing API credentials")
            raise MissingCredentials()

        self.logger.debug("Requesting access token from %s", self.token_url)
        resp = self.transport.post(
            self.token_url,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={"grant_type": "client_credentials"},
            auth=HTTPBasicAuth(self.credentials.client_id,
                               self.credentials.client_secret),
        )

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code != 200:
            description = payload.get("error_description") if isinstance(
                payload, dict) else resp.text
            self.logger.error(
                "Failed to generate Access Token: status=%s description=%s",
                resp.status_code,
                description,
            )
            raise AuthenticationFailed(resp.status_code, description)

        if not isinstance(payload, dict):
            raise InvalidResponse(resp.status_code, resp.text)

        token = payload.get("access_token")
        if not token:
            raise AuthenticationFailed(
                resp.status_code, "response did not include an access_token")

        self.logger.debug("Access token acquired (expires_in=%s)",
                          payload.get("expires_in"))
        return token
