"""
Veo API client with bearer-token authentication and Link-header pagination
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

import requests

from veo.exceptions import APIError, DecodeError, TransportError
from veo.models import (
    Period,
    Recording,
    RecordingDetails,
    decode_periods,
    decode_recordings,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.veo.co/api/app"
DEFAULT_TIMEOUT = 30.0

TOTAL_COUNT_HEADER = "x-veo-total-count"

# Server returns only these fields for list items
RECORDING_LIST_FIELDS = (
    "camera",
    "created",
    "start",
    "duration",
    "identifier",
    "slug",
    "title",
    "url",
    "thumbnail",
    "reel_url",
    "team",
    "privacy",
    "permissions",
    "is_accessible",
)


@dataclass(frozen=True)
class ListRecordingsOptions:
    """Pagination options for list_recordings

    page is 1-indexed; 0 means the first page.
    """

    page: int = 1
    fetch_all: bool = False


@dataclass
class ListRecordingsResult:
    recordings: list[Recording] = field(default_factory=list)
    # From the first page's header; informational only
    total_count: int = 0


def has_next_page(link_header: str | None) -> bool:
    """Check whether a Link header advertises a next page"""
    if not link_header:
        return False
    return 'rel="next"' in link_header


def _parse_total_count(value: str | None) -> int:
    if not value:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        logger.debug(f"Ignoring unparsable {TOTAL_COUNT_HEADER} header: {value!r}")
        return 0


class VeoClient:
    """Client for the Veo app API

    Configuration is fixed at construction time. Each public call issues its
    requests sequentially and raises on the first failure; nothing is retried.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self._token = token or None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def __repr__(self) -> str:
        """String representation that excludes the bearer token"""
        return (
            f"VeoClient("
            f"base_url={self._base_url!r}, "
            f"timeout={self._timeout!r}, "
            f"token_set={self.has_token}"
            f")"
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> VeoClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, body: Any = None) -> requests.Response:
        """Send one authenticated request; path is relative to base_url and may carry a query"""
        data = None
        if body is not None:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise TransportError("failed to marshal request body", details=str(e)) from e

        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        url = f"{self._base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"request failed: {type(e).__name__}", details=f"{method} {url}: {e}"
            ) from e

        logger.debug(f"{method} {url} -> HTTP {response.status_code}")
        return response

    @staticmethod
    def _decode(response: requests.Response, expect_body: bool = True) -> Any:
        """Check the status and decode the JSON body, always releasing the response"""
        try:
            if not 200 <= response.status_code < 300:
                try:
                    body = response.text
                except requests.exceptions.RequestException as e:
                    raise TransportError("failed to read error response", details=str(e)) from e
                raise APIError(response.status_code, body)

            if not expect_body:
                return None

            try:
                return response.json()
            except ValueError as e:
                raise DecodeError("failed to decode response", details=str(e)) from e
        finally:
            response.close()

    def _get(self, path: str) -> tuple[Any, requests.Response]:
        response = self._request("GET", path)
        return self._decode(response), response

    def list_recordings(
        self, club_slug: str, options: ListRecordingsOptions | None = None
    ) -> ListRecordingsResult:
        """List a club's own recordings

        Args:
            club_slug: Club identifier as used in Veo URLs
            options: Page to start from and whether to follow further pages

        With fetch_all, pages are followed for as long as the Link header
        carries rel="next". The total count comes from the first response only.
        """
        if options is None:
            options = ListRecordingsOptions()

        page = options.page if options.page > 0 else 1
        base_params: list[tuple[str, str]] = [("filter", "own")]
        base_params.extend(("fields", name) for name in RECORDING_LIST_FIELDS)
        endpoint = f"/clubs/{quote(club_slug, safe='')}/recordings/"

        result = ListRecordingsResult()
        first_page = True

        while True:
            params = list(base_params)
            # Page 1 is requested without the parameter to keep server default ordering
            if page > 1:
                params.append(("page", str(page)))

            data, response = self._get(f"{endpoint}?{urlencode(params)}")
            recordings = decode_recordings(data)

            if first_page:
                result.total_count = _parse_total_count(response.headers.get(TOTAL_COUNT_HEADER))
                first_page = False

            result.recordings.extend(recordings)
            logger.debug(f"Page {page}: {len(recordings)} recordings")

            if not options.fetch_all:
                break
            if not has_next_page(response.headers.get("Link")):
                break
            page += 1

        return result

    def get_recording(self, identifier: str) -> RecordingDetails:
        """Get details for one recording (match) by identifier"""
        data, _ = self._get(f"/matches/{quote(identifier, safe='')}/")
        return RecordingDetails.from_dict(data)

    def get_periods(self, slug: str) -> list[Period]:
        """Get the match periods (halves) for a recording

        Callers use this for enrichment only and should tolerate failures.
        """
        data, _ = self._get(f"/matches/{quote(slug, safe='')}/periods/")
        return decode_periods(data)
