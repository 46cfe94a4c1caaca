"""HTTP client for the remote publication-search service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from config import SearchConfig
from models import SearchRequest

TRANSPORT_ERROR_MESSAGE = "Could not reach the search service"

LOGGER = logging.getLogger(__name__)


class SearchError(RuntimeError):
    """Base class for a failed search submission."""


class SearchTransportError(SearchError):
    """The request could not be sent or no usable response came back."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(TRANSPORT_ERROR_MESSAGE)
        self.detail = detail


class SearchRejectedError(SearchError):
    """The service answered with a non-2xx status; the message is its body verbatim."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(body)
        self.status_code = status_code
        self.body = body


def execute_search(request: SearchRequest, config: SearchConfig) -> Any:
    """Send one search request and return the decoded JSON payload.

    No retries: every failure is terminal for this submission.
    """
    try:
        response = requests.request(
            request.method,
            request.url,
            params=request.params,
            data=request.data,
            files=request.files,
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as exc:
        LOGGER.warning("Search request failed: method=%s url=%s error=%s", request.method, request.url, exc)
        raise SearchTransportError(str(exc)) from exc

    if not response.ok:
        LOGGER.warning("Search rejected: status=%s url=%s", response.status_code, request.url)
        raise SearchRejectedError(response.status_code, response.text)

    try:
        payload = response.json()
    except ValueError as exc:
        LOGGER.warning("Search response was not JSON: url=%s error=%s", request.url, exc)
        raise SearchTransportError(f"Invalid JSON body: {exc}") from exc

    LOGGER.info("Search response received: status=%s url=%s", response.status_code, request.url)
    return payload
