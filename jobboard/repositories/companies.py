"""
Companies Repository.

Read-only: companies are looked up to nest them into job details.
"""
from typing import Any, Dict, Optional

from ..database import Database
from ..sql import select_list

COMPANY_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
COMPANY_FIELDS = ["handle", "name", "description", "numEmployees", "logoUrl"]


class CompanyRepository:
    def __init__(self, db: Database):
        self.db = db

    def find_by_handle(self, handle: str) -> Optional[Dict[str, Any]]:
        """Return {handle, name, description, numEmployees, logoUrl} or None."""
        rows = self.db.execute(
            f"""SELECT {select_list(COMPANY_FIELDS, COMPANY_COLUMNS)}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        return rows[0] if rows else None
