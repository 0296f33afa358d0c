"""
Airtable record store client.

Bulk insert into the candidates table and a single-record filtered lookup
used for duplicate detection.
"""

import httpx

from hh_airtable.config import settings
from hh_airtable.errors import PayloadError
from hh_airtable.utils.parser import read_json


class AirtableClient:
    """Bearer-authenticated client for one base/table."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        table: str = "People",
        api_url: str = "https://api.airtable.com/v0",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_id = base_id
        self.table = table
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "AirtableClient":
        return cls(
            api_key=settings.airtable_api_key,
            base_id=settings.airtable_base_id,
            table=settings.airtable_table,
            api_url=settings.airtable_api_url,
            timeout=settings.request_timeout,
        )

    @property
    def table_url(self) -> str:
        return f"{self.api_url}/{self.base_id}/{self.table}"

    async def create_records(self, records: list[dict]) -> list[str]:
        """
        Insert records in one request.

        Args:
            records: Field dicts, one per row

        Returns:
            Ids Airtable assigned to the new rows
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"records": [{"fields": fields} for fields in records]}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.table_url, headers=headers, json=payload)

        data = read_json(response, "airtable")
        created = data.get("records") if isinstance(data, dict) else None
        if not isinstance(created, list):
            raise PayloadError("Airtable insert response has no records list")
        return [r.get("id", "") for r in created]

    async def find_first(self, formula: str) -> dict | None:
        """Return the first record matching filterByFormula, or None."""
        headers = {"Authorization": f"Bearer {self.api_key}"}
        params = {"filterByFormula": formula, "maxRecords": 1}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.table_url, headers=headers, params=params)

        data = read_json(response, "airtable")
        records = data.get("records", []) if isinstance(data, dict) else []
        return records[0] if records else None
