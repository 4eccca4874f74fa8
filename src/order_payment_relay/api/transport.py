from __future__ import annotations

from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, Optional
import requests

from .errors import TransportError


class RequestsTransport:
    """Requests session wrapper.

    Single attempt per call: no retry adapter is mounted. Connection, DNS and
    timeout failures are re-raised as TransportError so callers only deal with
    the processor error hierarchy.

    One instance serves every inbound request, so the session keeps no
    cookies: a Set-Cookie answered to one caller must never ride along on
    another caller's token or order call.
    """

    def __init__(self, timeout: Optional[float] = 30.0, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.timeout = timeout

    def post(self, url: str, *, headers: Optional[Dict[str, str]] = None, data: Any = None, json: Any = None, auth: Any = None):
        try:
            return self.session.post(url, headers=headers, data=data, json=json, auth=auth, timeout=self.timeout)
        except requests.RequestException as ex:
            raise TransportError(url, ex) from ex

    def close(self) -> None:
        self.session.close()
