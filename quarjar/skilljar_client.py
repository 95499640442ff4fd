#!/usr/bin/env python3
"""
skilljar_client.py - Shared Skilljar API client

All requests go through ``SkilljarClient.request`` so that authentication,
timeouts and error reporting are handled in one place. Resource helpers
(lessons.py, assets.py, web_packages.py, ...) take a client as their
first argument.

Authentication is HTTP Basic with the API key as username and an empty
password.
"""

import json
import logging
from typing import Any, Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from quarjar.config_utils import DEFAULT_BASE_URL, QuarjarConfig
from quarjar.errors import SkilljarAPIError, missing_api_key_error
from quarjar.security_utils import DEFAULT_TIMEOUT, UPLOAD_TIMEOUT, mask_sensitive

logger = logging.getLogger(__name__)

BULLET = "•"


def format_error_detail(body: str) -> str:
    """
    Turn an error response body into readable text.

    Field-keyed JSON objects (the usual Django REST Framework shape) become
    one bullet per field; anything else is returned unchanged.
    """
    try:
        parsed = json.loads(body)
    except (TypeError, ValueError):
        return body

    if not isinstance(parsed, dict) or not parsed:
        return body

    lines = []
    for name, messages in parsed.items():
        if isinstance(messages, list):
            messages = ", ".join(str(m) for m in messages)
        elif isinstance(messages, dict):
            messages = json.dumps(messages)
        lines.append(f"  {BULLET} {name}: {messages}")
    return "\n".join(lines)


class SkilljarClient:
    """Thin wrapper around a requests.Session configured for Skilljar."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
        upload_timeout: Tuple[float, float] = UPLOAD_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise missing_api_key_error()

        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.upload_timeout = upload_timeout

        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(api_key, "")
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def from_config(cls, config: QuarjarConfig) -> "SkilljarClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            upload_timeout=config.upload_timeout,
        )

    def __repr__(self) -> str:
        return f"SkilljarClient(base_url={self.base_url!r}, api_key={mask_sensitive(self.api_key)!r})"

    def url(self, *parts: Any) -> str:
        """Join path segments onto the base URL."""
        path = "/".join(str(p).strip("/") for p in parts if p is not None and str(p) != "")
        return f"{self.base_url}/{path}"

    def request(
        self,
        method: str,
        *path: Any,
        operation: str = "API request",
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        files: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> requests.Response:
        """
        Perform a request and raise SkilljarAPIError on failure.

        ``operation`` is a short description used in error messages, e.g.
        ``"create lesson 'Intro'"``.
        """
        url = self.url(*path)
        timeout = self.upload_timeout if files else self.timeout
        logger.debug("[api] %s %s", method, url)

        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                data=data,
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise SkilljarAPIError(
                f"Failed to perform {operation}: {e}",
                operation=operation,
                context={"method": method, "url": url},
                cause=e,
            ) from e

        if resp.status_code >= 400:
            body = resp.text
            raise SkilljarAPIError(
                f"Failed to {operation} (HTTP {resp.status_code}):\n{format_error_detail(body)}",
                status_code=resp.status_code,
                operation=operation,
                body=body,
                context={"method": method, "url": url},
            )

        return resp

    @staticmethod
    def decode(resp: requests.Response) -> Any:
        """Decode a JSON body; empty bodies decode to None."""
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise SkilljarAPIError(
                f"Expected a JSON response from {resp.url}",
                status_code=resp.status_code,
                body=resp.text,
                cause=e,
            ) from e

    def get(self, *path: Any, operation: str = "API request", params: Optional[dict] = None) -> Any:
        return self.decode(self.request("GET", *path, operation=operation, params=params))

    def post(self, *path: Any, operation: str = "API request", **kwargs) -> Any:
        return self.decode(self.request("POST", *path, operation=operation, **kwargs))

    def delete(self, *path: Any, operation: str = "API request") -> None:
        self.request("DELETE", *path, operation=operation)
