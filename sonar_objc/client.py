"""SonarQube web API client for the rule and quality-profile endpoints.

Usage:
    client = SonarClient(url="https://sonar.example.com", token="squ_xxx")
    rules  = client.get_paginated("/api/rules/search", {"repositories": "OCLint"}, results_key="rules")
    client.post_file("/api/qualityprofiles/restore", "backup", "profile.xml", xml_text)
"""

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

PAGE_SIZE = 500


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class SonarClientError(Exception):
    """Base exception for all client errors."""


class AuthenticationError(SonarClientError):
    """Raised on HTTP 401 — invalid or expired token."""


class PermissionDeniedError(SonarClientError):
    """Raised on HTTP 403, e.g. pushing a profile without 'Administer Quality Profiles'."""


class NotFoundError(SonarClientError):
    """Raised on HTTP 404 — resource not found."""


class NetworkError(SonarClientError):
    """Raised on connection timeout or unreachable server."""


_STATUS_ERRORS = {
    401: (AuthenticationError, "Authentication failed for {url}, check that the token is valid"),
    403: (PermissionDeniedError, "Insufficient privileges for {url}"),
    404: (NotFoundError, "Resource not found: {url}"),
}


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class SonarClient:
    """Token-authenticated session bound to one SonarQube server."""

    def __init__(self, url: str, token: str, timeout: int = 30) -> None:
        self.base_url = url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        # SonarQube auth: token as username, empty password
        self._session.auth = (token, "")

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict:
        """GET *endpoint* and return the decoded JSON body.

        Raises:
            AuthenticationError:   HTTP 401
            PermissionDeniedError: HTTP 403
            NotFoundError:         HTTP 404
            SonarClientError:      Any other non-2xx response
            NetworkError:          Timeout or connection failure
        """
        return self._request("GET", endpoint, params=params or {})

    def post_file(self, endpoint: str, field_name: str, file_name: str,
                  content: str, data: dict[str, Any] | None = None) -> dict:
        """POST *content* as a multipart file upload (e.g. a profile backup)."""
        files = {field_name: (file_name, content.encode("utf-8"), "application/xml")}
        return self._request("POST", endpoint, data=data or {}, files=files)

    def get_paginated(self, endpoint: str, params: dict[str, Any], results_key: str) -> list[dict]:
        """Collect *results_key* across every ``p``/``ps`` page of *endpoint*.

        ``/api/rules/search`` reports ``total`` at the top level, newer
        endpoints under ``paging``.
        """
        collected: list[dict] = []
        page = 1
        while True:
            data = self.get(endpoint, {**params, "ps": PAGE_SIZE, "p": page})
            batch = data.get(results_key, [])
            collected.extend(batch)

            total = data.get("paging", {}).get("total", data.get("total", len(collected)))
            if not batch or len(collected) >= total:
                return collected
            page += 1

    def _request(self, method: str, endpoint: str, **kwargs) -> dict:
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while contacting '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(
                f"Unable to reach SonarQube server at '{self.base_url}'"
            ) from exc

        if response.status_code in _STATUS_ERRORS:
            error_class, template = _STATUS_ERRORS[response.status_code]
            raise error_class(template.format(url=url))
        if not response.ok:
            raise SonarClientError(
                f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
            )

        # restore can answer 204 No Content
        if not response.content:
            return {}
        return response.json()
