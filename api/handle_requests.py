"""
HTTP request handler with rate limiting, retry logic, and SpaceTraders-specific error handling.
Implements backoff for 429 (rate limit) and 5xx (server) errors and unwraps the
{"data": ...} / {"error": ...} response envelope.
"""
import logging
import time
from typing import Any

import requests
from pyrate_limiter import Duration, Limiter, MemoryListBucket, RequestRate
from requests.adapters import HTTPAdapter
from requests_ratelimiter import LimiterSession
from urllib3.util.retry import Retry

from api.errors import (
    TOKEN_RESET_ERROR_CODE,
    ApiRequestError,
    InvalidResponseError,
    NetworkError,
    TokenResetError,
)
from data.models.agent import ErrorResponse


def response_data(payload: dict, key: str | None = None) -> Any:
    """
    Return payload["data"] (or payload["data"][key]).
    Raises InvalidResponseError when the server left it out.
    """
    data = payload.get("data")
    if key is not None:
        data = data.get(key) if isinstance(data, dict) else None
    if data is None:
        missing = "data" if key is None else f"data.{key}"
        raise InvalidResponseError(None, f"response has no {missing!r}")
    return data


class RequestHandler:
    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limiter = Limiter(
            RequestRate(2, Duration.SECOND),
            RequestRate(30, Duration.MINUTE),
            bucket_class=MemoryListBucket,
        )
        self.session = LimiterSession(limiter=self.limiter, per_host=False)
        self.retry = Retry(
            total=6,
            connect=3, read=3, status=6,
            backoff_factor=1.2,
            status_forcelist=[429, 500, 502, 503, 504],
            respect_retry_after_header=True,
            raise_on_status=False,
        )
        self.adapter = HTTPAdapter(max_retries=self.retry)
        self.session.mount("https://", self.adapter)
        self.session.mount("http://", self.adapter)

    def _sleep_with_jitter(self, seconds: float):
        time.sleep(seconds * (0.9 + 0.2 * (time.time() % 1)))

    def _handle_spacetraders_429(self, resp) -> bool:
        """
        If SpaceTraders returns its own 429 (with x-ratelimit-*), wait until reset.
        Otherwise, fall back to generic Retry behavior already configured.
        """
        if resp is None or resp.status_code != 429:
            return False

        h = resp.headers
        if "x-ratelimit-limit" not in h:
            return False

        reset_raw = h.get("x-ratelimit-reset")
        if reset_raw:
            try:
                reset_val = float(reset_raw)
                now = time.time()
                wait_s = reset_val - now if reset_val > 1e10 else reset_val
                wait_s = max(0.0, min(wait_s, 60.0))
                if wait_s > 0:
                    logging.info(f"Rate limited by SpaceTraders; waiting {wait_s:.1f}s")
                    self._sleep_with_jitter(wait_s)
                    return True
            except ValueError:
                # Reset header may be an ISO timestamp; fall through to the fixed wait.
                pass
        self._sleep_with_jitter(2.0)
        return True

    def auth_headers(self, token: str | None) -> dict:
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise NetworkError(e) from e

    def unwrap(self, resp: requests.Response) -> dict:
        """
        Decode the response envelope.
        Returns the whole payload when it carries "data" (so "meta" stays reachable),
        raises ApiRequestError / TokenResetError when it carries "error".
        """
        if not resp.content:
            # Retry gives back the last 5xx once it runs out of attempts, often with no body
            if resp.ok:
                return {}
            raise InvalidResponseError(resp.status_code, resp.text)
        try:
            payload = resp.json()
        except ValueError:
            raise InvalidResponseError(resp.status_code, resp.text)
        if not isinstance(payload, dict):
            raise InvalidResponseError(resp.status_code, resp.text)

        err = payload.get("error")
        if isinstance(err, dict):
            error = ErrorResponse.from_dict(err)
            logging.debug(f"<< {resp.status_code} error {error.code}: {error.message}")
            if error.code == TOKEN_RESET_ERROR_CODE:
                raise TokenResetError(error, resp.status_code)
            raise ApiRequestError(error, resp.status_code)
        if "data" not in payload:
            raise InvalidResponseError(resp.status_code, resp.text)
        return payload

    def request_json(
        self,
        method: str,
        path: str,
        token: str | None,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """
        JSON request helper using rate-limited session + retries.
        path: path relative to base_url (no leading slash)
        """
        url = f"{self.base_url}/{path}"
        headers = {"Content-Type": "application/json", **self.auth_headers(token)}
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json

        logging.debug(f">> {method} {url}")
        resp = self._send(method, url, **kwargs)
        if resp.status_code == 429 and self._handle_spacetraders_429(resp):
            resp = self._send(method, url, **kwargs)
        elif resp.status_code == 502:
            self._sleep_with_jitter(3.0)
        logging.debug(f"<< {resp.status_code} {method} {url}")
        return self.unwrap(resp)

    def get_json(self, path: str, token: str | None, params: dict | None = None) -> dict:
        return self.request_json("GET", path, token, params=params)

    def post_json(self, path: str, token: str | None, json: dict | None = None) -> dict:
        return self.request_json("POST", path, token, json=json)

    def patch_json(self, path: str, token: str | None, json: dict | None = None) -> dict:
        return self.request_json("PATCH", path, token, json=json)

    def get_all_pages(self, path: str, token: str | None, limit: int = 20, params: dict | None = None) -> list:
        """
        Walk a paginated list endpoint and concatenate its "data" arrays.
        Stops once meta.total items were collected or a page comes back empty.
        """
        collected: list = []
        page = 1
        while True:
            query = dict(params or {})
            query.update({"page": page, "limit": limit})
            payload = self.get_json(path, token, params=query)
            items = payload.get("data") or []
            collected.extend(items)
            total = (payload.get("meta") or {}).get("total")
            if not items or total is None or len(collected) >= total:
                return collected
            page += 1
