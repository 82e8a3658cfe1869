# api_client.py
"""
HTTP client for the billing API.

Every call carries the bearer token of the current session. A 401 triggers one
token refresh followed by one replay of the original call; if the refresh is
impossible the session is cleared and `on_auth_failure` is invoked.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2  # the original call plus one replay after a refresh
REFRESH_PATH = "/auth/refresh-token"


class ApiError(Exception):
    def __init__(
            self,
            message: Optional[str] = None,
            status_code: Optional[int] = None,
            payload: Optional[Any] = None,
    ):
        super().__init__(message or f"HTTP {status_code}")
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @classmethod
    def from_response(cls, resp: requests.Response) -> "ApiError":
        payload = None
        message = None
        try:
            payload = resp.json()
        except ValueError:
            pass
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error")
        return cls(message, resp.status_code, payload)

    def describe(self, fallback: str) -> str:
        """
        Text for the user: the server's message when it sent one.
        """
        return self.message or fallback


@dataclass
class ApiRequest:
    """
    One logical call. `attempts` counts how many times it went over the wire.
    """
    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Optional[Any] = None
    auth: bool = True  # False for login/registration: no bearer, no refresh
    raw: bool = False  # return bytes instead of decoded JSON
    attempts: int = 0


class ApiClient:
    def __init__(
            self,
            base_url: str,
            session,
            http: Optional[requests.Session] = None,
            timeout: float = 10,
            on_auth_failure: Optional[Callable[[], None]] = None,
    ):
        """
        `session` must expose `access_token`, `refresh_token`,
        `replace_tokens(access, refresh)` and `clear()`.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http or requests.Session()
        self.timeout = timeout
        self.on_auth_failure = on_auth_failure
        self._refresh_lock = threading.Lock()

    # -----------------------------------------------------------------
    # Verbs
    # -----------------------------------------------------------------

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.send(ApiRequest("GET", path, params=params))

    def post(self, path: str, json: Optional[Any] = None, auth: bool = True) -> Any:
        return self.send(ApiRequest("POST", path, json=json, auth=auth))

    def put(self, path: str, json: Optional[Any] = None) -> Any:
        return self.send(ApiRequest("PUT", path, json=json))

    def patch(self, path: str, json: Optional[Any] = None) -> Any:
        return self.send(ApiRequest("PATCH", path, json=json))

    def delete(self, path: str) -> Any:
        return self.send(ApiRequest("DELETE", path))

    def download(self, path: str) -> bytes:
        return self.send(ApiRequest("GET", path, raw=True))

    # -----------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------

    def send(self, call: ApiRequest) -> Any:
        while True:
            token = self.session.access_token if call.auth else None
            call.attempts += 1
            resp = self._transmit(call, token)

            if resp.status_code == 401 and call.auth and token and call.attempts < MAX_ATTEMPTS:
                if self._refresh(stale_token=token):
                    logger.info("Replaying %s %s with a refreshed token", call.method, call.path)
                    continue
                self._expire()
                raise ApiError.from_response(resp)

            if not resp.ok:
                err = ApiError.from_response(resp)
                logger.warning(
                    "%s %s failed with %s: %s", call.method, call.path, resp.status_code, err.message
                )
                raise err

            if call.raw:
                return resp.content
            return self._decode(resp)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _transmit(self, call: ApiRequest, token: Optional[str]) -> requests.Response:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/pdf" if call.raw else "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            return self.http.request(
                call.method,
                self._url(call.path),
                params=call.params,
                json=call.json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Error calling %s %s: %s", call.method, call.path, e)
            raise ApiError("Error communicating with backend API") from e

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("Invalid JSON response from API", resp.status_code) from e

    def _refresh(self, stale_token: str) -> bool:
        """
        Exchange the stored refresh token for a new pair. Only one refresh runs
        at a time; a caller whose token was already rotated just retries.
        """
        with self._refresh_lock:
            current = self.session.access_token
            if current is not None and current != stale_token:
                logger.info("Access token already refreshed by a concurrent request")
                return True

            refresh_token = self.session.refresh_token
            if not refresh_token:
                logger.warning("Got 401 and no refresh token is stored")
                return False

            try:
                resp = self.http.post(
                    self._url(REFRESH_PATH),
                    json={"refreshToken": refresh_token},
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                )
                resp.raise_for_status()
                data = resp.json()["data"]
                access_token = data["accessToken"]
                new_refresh_token = data.get("refreshToken") or refresh_token
            except (requests.RequestException, ValueError, KeyError, TypeError) as e:
                logger.warning("Token refresh failed: %s", e)
                return False

            self.session.replace_tokens(access_token, new_refresh_token)
            logger.info("Access token refreshed")
            return True

    def _expire(self) -> None:
        self.session.clear()
        if self.on_auth_failure is not None:
            self.on_auth_failure()
