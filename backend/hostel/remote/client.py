# hostel/remote/client.py
"""
Thin client for the hosted service: a PostgREST-style table API under
/rest/v1, named procedures under /rest/v1/rpc, and a GoTrue-style auth API
under /auth/v1.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests  # type: ignore

from ..errors import RemoteError

logger = logging.getLogger(__name__)

OBJECT_ACCEPT = "application/vnd.pgrst.object+json"
_CONTENT_RANGE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")


def error_from_response(resp: requests.Response) -> RemoteError:
    """Pull the human-readable message out of an error body, whichever API produced it."""
    message = None
    code = None
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                message = str(body[key])
                break
        code = body.get("code") or body.get("error_code")
    if not message:
        message = (resp.text or "").strip() or f"HTTP {resp.status_code}"
    return RemoteError(message, code=str(code) if code is not None else None, status=resp.status_code)


def parse_count(content_range: Optional[str]) -> Optional[int]:
    if not content_range:
        return None
    m = _CONTENT_RANGE.match(content_range.strip())
    if not m or m.group(1) == "*":
        return None
    return int(m.group(1))


def _clean_select(columns: str) -> str:
    # whitespace is not allowed in the select parameter
    return re.sub(r"\s+", "", columns)


@dataclass
class QueryResult:
    data: Any = None
    count: Optional[int] = None


class TableQuery:
    """Chainable request builder: client.table("rooms").select("*").eq("status", "Available").execute()"""

    def __init__(self, client: "RemoteClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._select: Optional[str] = None
        self._filters: List[Tuple[str, str]] = []
        self._order: List[Tuple[str, str]] = []
        self._limit: Optional[int] = None
        self._count: Optional[str] = None
        self._head = False
        self._single = False
        self._body: Any = None

    # ---- reads
    def select(self, columns: str = "*", count: Optional[str] = None, head: bool = False) -> "TableQuery":
        self._select = _clean_select(columns)
        self._count = count
        self._head = head
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{value}"))
        return self

    def order(self, column: str, desc: bool = False, foreign_table: Optional[str] = None) -> "TableQuery":
        key = f"{foreign_table}.order" if foreign_table else "order"
        self._order.append((key, f"{column}.{'desc' if desc else 'asc'}"))
        return self

    def limit(self, n: int) -> "TableQuery":
        self._limit = n
        return self

    def single(self) -> "TableQuery":
        self._single = True
        return self

    # ---- writes
    def insert(self, rows: Any) -> "TableQuery":
        self._method = "POST"
        self._body = rows
        return self

    def update(self, values: Dict[str, Any]) -> "TableQuery":
        self._method = "PATCH"
        self._body = values
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    # ---- request
    def build_params(self) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        if self._select is not None:
            params.append(("select", self._select))
        params.extend(self._filters)
        merged: Dict[str, List[str]] = {}
        for key, val in self._order:
            merged.setdefault(key, []).append(val)
        params.extend((key, ",".join(vals)) for key, vals in merged.items())
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        return params

    def build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        prefer = []
        if self._method in ("POST", "PATCH", "DELETE"):
            prefer.append("return=representation" if self._select is not None else "return=minimal")
        if self._count:
            prefer.append(f"count={self._count}")
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        if self._single:
            headers["Accept"] = OBJECT_ACCEPT
        return headers

    def execute(self) -> QueryResult:
        method = "HEAD" if (self._method == "GET" and self._head) else self._method
        resp = self._client.request(
            method,
            f"/rest/v1/{self._table}",
            params=self.build_params(),
            json=self._body,
            headers=self.build_headers(),
        )
        count = parse_count(resp.headers.get("Content-Range"))
        if method == "HEAD" or not resp.content:
            return QueryResult(data=None, count=count)
        return QueryResult(data=resp.json(), count=count)


class RemoteClient:
    """One handle per dashboard client; the bearer token follows that client's session."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        service_key: str = "",
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        if not url:
            raise RuntimeError("REMOTE_URL is not set")
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.service_key = service_key
        self.timeout = timeout
        self.http = http or requests.Session()
        self.access_token: Optional[str] = None

    def _default_headers(self, bearer: Optional[str] = None) -> Dict[str, str]:
        token = bearer or self.access_token or self.anon_key
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {token}",
        }

    def request(
        self,
        method: str,
        path: str,
        params: Any = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        bearer: Optional[str] = None,
    ) -> requests.Response:
        all_headers = self._default_headers(bearer)
        if bearer and bearer == self.service_key:
            all_headers["apikey"] = self.service_key
        all_headers.update(headers or {})
        try:
            resp = self.http.request(
                method,
                f"{self.url}{path}",
                params=params,
                json=json,
                headers=all_headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"[remote] {method} {path} failed: {e}")
            raise RemoteError(str(e), code="network_error")
        if not resp.ok:
            err = error_from_response(resp)
            logger.warning(f"[remote] {method} {path} -> {resp.status_code}: {err.message}")
            raise err
        return resp

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = self.request("POST", f"/rest/v1/rpc/{name}", json=params or {})
        if not resp.content:
            return None
        return resp.json()
