"""Authenticated App Store Connect API client.

Every call is a single attempt: the caller (a human or an agent) decides
whether to retry. Collection endpoints can be walked with
``request_all_pages``, which follows ``links.next`` cursors up to a page cap.
"""
import json
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, ValidationError

from .auth import generate_token
from .config import Settings, get_settings
from .errors import ApiError

BASE_URL = "https://api.appstoreconnect.apple.com"
DEFAULT_MAX_PAGES = 10
ALLOWED_METHODS = ("GET", "POST", "PATCH", "DELETE")


class ErrorEntry(BaseModel):
    """One entry of a JSON:API error document."""

    status: str
    code: str
    title: str
    detail: str


class ErrorEnvelope(BaseModel):
    """JSON:API error document returned on failed requests."""

    errors: list[ErrorEntry]


def create_http_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """Create the HTTP transport bound to the App Store Connect origin."""
    settings = settings or get_settings()
    return httpx.AsyncClient(base_url=BASE_URL, timeout=settings.request_timeout)


def _clean_params(params: Optional[dict[str, Optional[str]]]) -> dict[str, str]:
    """Drop query parameters left blank, so unused filters never reach the API."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None and value != ""}


def _error_detail(response: httpx.Response) -> tuple[str, list[dict]]:
    text = response.text
    try:
        envelope = ErrorEnvelope.model_validate_json(text)
    except ValidationError:
        return text or f"HTTP {response.status_code} {response.reason_phrase}", []

    detail = "\n".join(
        f"{e.status} {e.code}: {e.title} - {e.detail}" for e in envelope.errors
    )
    return detail, [e.model_dump() for e in envelope.errors]


class AppStoreConnectClient:
    """Issues authenticated requests against the App Store Connect API.

    The underlying ``httpx.AsyncClient`` is owned by the caller and must be
    bound to ``BASE_URL`` (see ``create_http_client``).
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: Callable[[], str] = generate_token,
    ):
        self._http = http
        self._token_provider = token_provider

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Optional[str]]] = None,
    ) -> dict:
        """Perform one API call and return the decoded JSON:API document.

        Empty success bodies (204 No Content) come back as ``{"data": None}``.

        Raises:
            ApiError: the API answered with a non-2xx status
            ValueError: ``method`` is not one the API accepts
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        headers = {
            "Authorization": f"Bearer {self._token_provider()}",
            "Content-Type": "application/json",
        }
        content = json.dumps(body) if body is not None else None

        response = await self._http.request(
            method,
            path,
            params=_clean_params(params),
            headers=headers,
            content=content,
        )

        if not response.is_success:
            detail, errors = _error_detail(response)
            raise ApiError(response.status_code, detail, errors)

        if not response.text:
            return {"data": None}
        return response.json()

    async def request_all_pages(
        self,
        path: str,
        params: Optional[dict[str, Optional[str]]] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> dict:
        """GET a collection, following ``links.next`` for at most ``max_pages`` pages.

        Data and included resources from every page are concatenated in page
        order. ``meta.paging.total`` is the number of aggregated items;
        ``meta.paging.truncated`` is set when the page cap stopped the walk
        while more pages remained.
        """
        all_data: list = []
        all_included: list = []
        current_path = path
        current_params = params
        pages = 0
        truncated = False

        while pages < max_pages:
            page = await self.request("GET", current_path, None, current_params)

            data = page.get("data")
            if isinstance(data, list):
                all_data.extend(data)
            elif data is not None:
                all_data.append(data)

            if page.get("included"):
                all_included.extend(page["included"])

            next_url = (page.get("links") or {}).get("next")
            if not next_url:
                break

            next_page = httpx.URL(next_url)
            current_path = next_page.path
            current_params = dict(next_page.params)
            pages += 1
        else:
            truncated = True

        result: dict = {"data": all_data}
        if all_included:
            result["included"] = all_included
        paging: dict = {"total": len(all_data)}
        if truncated:
            paging["truncated"] = True
        result["meta"] = {"paging": paging}
        return result
