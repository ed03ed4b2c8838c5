"""Thin HTTP client helpers for JSON, query-string and form requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Mapping

import requests

from merchlib.util.jsonutil import json_to_map

__all__ = [
    "Response",
    "HTTPStatusError",
    "request_with_body",
    "request_with_query",
    "post",
    "put",
    "post_query_params",
    "get",
    "get_json",
    "post_form_bytes",
    "post_form",
    "post_form_raw",
    "post_form_xml",
]

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"


@dataclass
class Response:
    """Status, text body and headers of a completed request."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


class HTTPStatusError(RuntimeError):
    """Raised when a form request does not answer with 200; keeps any body read."""

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        super().__init__(f"状态码：{status_code}")
        self.status_code = status_code
        self.body = body


def _wrap(resp: requests.Response) -> Response:
    return Response(resp.status_code, resp.text, dict(resp.headers))


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    wanted = name.lower()
    return any(key.lower() == wanted for key in headers)


def request_with_body(
    url: str, body: bytes, headers: Mapping[str, str] | None = None, method: str = "POST"
) -> Response:
    """Send ``body`` with ``method``; a non-empty body defaults to a JSON content type."""
    hdrs = dict(headers or {})
    if body and not _has_header(hdrs, "Content-Type"):
        hdrs["Content-Type"] = _JSON_CONTENT_TYPE
    resp = requests.request(method, url, data=bytes(body) if body else None, headers=hdrs)
    return _wrap(resp)


def request_with_query(
    url: str,
    query_params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    method: str = "GET",
) -> Response:
    """Send a request whose parameters travel in the query string."""
    resp = requests.request(
        method, url, params=dict(query_params or {}), headers=dict(headers or {})
    )
    return _wrap(resp)


def post(url: str, body: bytes, headers: Mapping[str, str] | None = None) -> Response:
    return request_with_body(url, body, headers, "POST")


def put(url: str, body: bytes, headers: Mapping[str, str] | None = None) -> Response:
    return request_with_body(url, body, headers, "PUT")


def post_query_params(
    url: str,
    query_params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    return request_with_query(url, query_params, headers, "POST")


def get(
    url: str,
    query_params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    return request_with_query(url, query_params, headers, "GET")


def get_json(
    url: str,
    query_params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> bytes:
    """GET and return the raw response body."""
    resp = requests.get(url, params=dict(query_params or {}), headers=dict(headers or {}))
    return resp.content


def _form_body(params: Mapping[str, str]) -> bytes:
    """Join ``key=value`` pairs with ``&`` in reverse order, without escaping."""
    return "&".join(f"{key}={value}" for key, value in reversed(list(params.items()))).encode(
        "utf-8"
    )


def _form_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    hdrs = {k: v for k, v in (headers or {}).items() if k.lower() != "content-type"}
    hdrs["Content-Type"] = _FORM_CONTENT_TYPE
    return hdrs


def post_form_bytes(
    url: str, params: Mapping[str, str], headers: Mapping[str, str] | None = None
) -> bytes:
    """POST ``params`` as a form and return the body; non-200 raises HTTPStatusError."""
    body = _form_body(params)
    resp = requests.post(url, data=body or None, headers=_form_headers(headers))
    if resp.status_code != 200:
        raise HTTPStatusError(resp.status_code, resp.content)
    return resp.content


def post_form(
    url: str, params: Mapping[str, str], headers: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """POST ``params`` as a form and decode the JSON object answered."""
    return json_to_map(post_form_bytes(url, params, headers))


def post_form_raw(
    url: str, data: bytes | IO[bytes], headers: Mapping[str, str] | None = None
) -> bytes:
    """POST an already encoded form body; non-200 raises HTTPStatusError."""
    resp = requests.post(url, data=data, headers=_form_headers(headers))
    if resp.status_code != 200:
        raise HTTPStatusError(resp.status_code)
    return resp.content


def post_form_xml(
    url: str, params: Mapping[str, str], headers: Mapping[str, str] | None = None
) -> bytes:
    """POST ``params`` as a form and return the body whatever the status."""
    body = _form_body(params)
    resp = requests.post(url, data=body or None, headers=_form_headers(headers))
    return resp.content