import logging
from datetime import date
from typing import Any

import httpx

from bol_enrichment.config import settings
from .query_builder import QueryBuilder

logger = logging.getLogger(__name__)


class GatewayAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Gateway API error {status_code}: {message}")


class GatewayClient:
    """Client for the Logistic Intel gateway BOL endpoint.

    One bounded request per call: no pagination and no retries. Callers
    decide what a failure means; the enrichment engine turns it into a
    null result.
    """

    BOLS_ENDPOINT = "/public/iy/companyBols"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.GATEWAY_BASE_URL).rstrip("/")
        self.api_key = settings.GATEWAY_API_KEY if api_key is None else api_key
        self.timeout = timeout or settings.GATEWAY_TIMEOUT_SECONDS
        self._transport = transport

    async def fetch_company_bols(
        self,
        company_id: str,
        limit: int,
        offset: int = 0,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> dict[str, Any]:
        """Fetch one page of BOL rows for a company.

        Returns the gateway envelope: {"ok": bool, "rows": [...]}.
        """
        payload = QueryBuilder.build_bols_query(
            company_id=company_id,
            limit=limit,
            offset=offset,
            start_date=start_date,
            end_date=end_date,
        )
        data = await self._request(self.BOLS_ENDPOINT, payload)

        rows = data.get("rows")
        logger.info(
            f"companyBols {company_id}: ok={data.get('ok')} "
            f"rows={len(rows) if isinstance(rows, list) else 0}"
        )
        return data

    async def _request(self, endpoint: str, payload: dict) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}{endpoint}",
                headers=headers,
                json=payload,
            )

        if response.status_code != 200:
            raise GatewayAPIError(response.status_code, response.text)

        data = response.json()
        if not isinstance(data, dict):
            raise GatewayAPIError(response.status_code, "Unexpected response body")
        return data
