"""Client for the hosted remote backend (PostgREST over HTTPS)."""
from typing import Any, Dict, List, Optional

import httpx

from cafe_pos.core.exceptions import RemoteBackendError, RemoteInitError
from cafe_pos.domain.settings.schemas import AppSettings

PRODUCTS_TABLE = "products"
TRANSACTIONS_TABLE = "transactions"


class RemoteClient:
    """Row-level access to the remote ``products`` and ``transactions`` tables.

    Reads are full-table selects, writes are single-row operations keyed by
    ``id``. Every failure (transport, non-2xx status, undecodable body) is
    raised as ``RemoteBackendError``.
    """

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        endpoint: str,
        credential: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the remote client.

        Args:
            endpoint: Project URL, e.g. https://xyz.example.co
            credential: API key sent as ``apikey`` and bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.endpoint = endpoint.rstrip("/")
        self.headers = {
            "apikey": credential,
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }
        self._http = httpx.AsyncClient(
            base_url=self.endpoint + self.REST_PATH,
            headers=self.headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise RemoteBackendError(
                f"{method} {table} returned {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteBackendError(f"{method} {table} failed: {e}") from e

    async def select_all(self, table: str, order: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Select every row of a table.

        Args:
            table: Table name
            order: PostgREST order expression, e.g. ``timestamp.desc``

        Returns:
            List of row dicts
        """
        params = {"select": "*"}
        if order:
            params["order"] = order

        response = await self._request("GET", table, params=params)
        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteBackendError(f"GET {table} returned a non-JSON body") from e
        if not isinstance(rows, list):
            raise RemoteBackendError(f"GET {table} returned {type(rows).__name__}, expected list")
        return rows

    async def upsert(self, table: str, row: Dict[str, Any]) -> None:
        await self._request(
            "POST",
            table,
            json=row,
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )

    async def insert(self, table: str, row: Dict[str, Any]) -> None:
        await self._request("POST", table, json=row, headers={"Prefer": "return=minimal"})

    async def delete(self, table: str, row_id: str) -> None:
        await self._request("DELETE", table, params={"id": f"eq.{row_id}"})


def create_remote_client(
    app_settings: AppSettings,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RemoteClient:
    """Build a client from the saved settings or raise ``RemoteInitError``."""
    endpoint = app_settings.remote_endpoint.strip()
    credential = app_settings.remote_credential.strip()
    if not endpoint or not credential:
        raise RemoteInitError("Remote endpoint and credential are both required")

    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as e:
        raise RemoteInitError(f"Invalid remote endpoint: {endpoint}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise RemoteInitError(f"Remote endpoint must be an http(s) URL: {endpoint}")

    try:
        return RemoteClient(endpoint, credential, timeout=timeout, transport=transport)
    except ValueError as e:
        # header values must be ASCII; UnicodeEncodeError is a ValueError
        raise RemoteInitError("Remote credential contains unsupported characters") from e
