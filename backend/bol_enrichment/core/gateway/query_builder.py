"""Build valid gateway payloads for the companyBols endpoint."""

from datetime import date


class QueryBuilder:
    """Constructs well-formed companyBols query payloads.

    Ensures:
    - company_id is present (the gateway answers 400 otherwise)
    - limit and offset are non-negative integers
    - dates use the gateway's MM/DD/YYYY format
    """

    DATE_FORMAT = "%m/%d/%Y"

    @staticmethod
    def build_bols_query(
        company_id: str,
        limit: int = 500,
        offset: int = 0,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> dict:
        if not isinstance(company_id, str) or not company_id.strip():
            raise ValueError("company_id is required")

        payload: dict = {
            "company_id": company_id.strip(),
            "limit": max(1, int(limit)),
            "offset": max(0, int(offset)),
        }

        if isinstance(start_date, date):
            start_date = start_date.strftime(QueryBuilder.DATE_FORMAT)
        if isinstance(end_date, date):
            end_date = end_date.strftime(QueryBuilder.DATE_FORMAT)
        if start_date:
            payload["start_date"] = start_date
        if end_date:
            payload["end_date"] = end_date

        return payload
