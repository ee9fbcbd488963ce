"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Renaming storage columns to application field names and nesting the
  owning company into job details.

Non-Responsibilities:
- No payload validation (see jobboard.schema).
- No check that a company exists before insert; the foreign key does that.

Invariant:
Caller values only ever reach the database as bound parameters.
"""
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from ..database import Database
from ..errors import NotFoundError
from ..sql import compile_set_clause, compile_where_clause, escape_like, select_list
from .companies import CompanyRepository

# companyHandle is translated so updates may move a job to another company
JOB_COLUMNS = {
    "companyHandle": "company_handle",
}
JOB_FIELDS = ["id", "title", "salary", "equity", "companyHandle"]


@dataclass(frozen=True)
class JobFilters:
    """Optional constraints for find_all. None means "not given"."""

    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "JobFilters":
        return cls(
            title=payload.get("title"),
            min_salary=payload.get("minSalary"),
            has_equity=payload.get("hasEquity"),
        )


def _title_contains(value: str, placeholder: str):
    return f"LOWER(j.title) LIKE LOWER({placeholder}) ESCAPE '\\'", [f"%{escape_like(value)}%"]


def _salary_at_least(value: int, placeholder: str):
    return f"j.salary >= {placeholder}", [value]


def _has_equity(value: bool, placeholder: str):
    # False cannot mean "no equity"; it is treated like an absent flag
    if value is not True:
        return None
    return "j.equity > 0", []


JOB_FILTERS = [
    ("title", _title_contains),
    ("min_salary", _salary_at_least),
    ("has_equity", _has_equity),
]


def _format_equity(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float):
        value = Decimal(repr(value))
    # fixed-point, never exponent notation
    return format(Decimal(value), "f")


def _shape_job(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {**row, "equity": _format_equity(row["equity"])}


class JobRepository:
    """Job entity interface: create, find_all, get, update, remove."""

    def __init__(self, db: Database, companies: Optional[CompanyRepository] = None):
        self.db = db
        self.companies = companies or CompanyRepository(db)
        self.logger = db.logger

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a job.

        Args:
            data: {title, salary, equity, companyHandle}; salary and equity may be omitted

        Returns:
            {id, title, salary, equity, companyHandle}
        """
        self.logger.record_operation("create")
        rows = self.db.execute(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {select_list(JOB_FIELDS, JOB_COLUMNS)}""",
            [
                data["title"],
                data.get("salary"),
                data.get("equity"),
                data["companyHandle"],
            ],
        )
        job = _shape_job(rows[0])
        self.logger.info("Job created", id=job["id"], company_handle=job["companyHandle"])
        return job

    def find_all(self, filters: Optional[JobFilters] = None) -> List[Dict[str, Any]]:
        """
        List jobs ordered by title, optionally filtered.

        Returns:
            [{id, title, salary, equity, companyHandle, companyName}, ...]
        """
        self.logger.record_operation("find_all")
        criteria = asdict(filters) if filters is not None else {}
        where = compile_where_clause(criteria, JOB_FILTERS)

        query = f"""SELECT {select_list(JOB_FIELDS, JOB_COLUMNS, prefix="j.")},
                       c.name AS "companyName"
                FROM jobs j
                LEFT JOIN companies c ON c.handle = j.company_handle"""
        if where.where:
            query += f"\n{where.where}"
        query += "\nORDER BY j.title"

        rows = self.db.execute(query, where.values)
        return [_shape_job(row) for row in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        """
        Fetch one job with its company nested under "company".

        Returns:
            {id, title, salary, equity, company: {handle, name, description, numEmployees, logoUrl}}

        Raises:
            NotFoundError: no job with that id
        """
        self.logger.record_operation("get")
        rows = self.db.execute(
            f"""SELECT {select_list(JOB_FIELDS, JOB_COLUMNS)}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        )
        if not rows:
            raise self._not_found(job_id)

        job = _shape_job(rows[0])
        company = self.companies.find_by_handle(job["companyHandle"])

        details = {k: v for k, v in job.items() if k != "companyHandle"}
        details["company"] = company
        return details

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the fields present in data change.

        Data can include: {title, salary, equity, companyHandle}

        Returns:
            {id, title, salary, equity, companyHandle}

        Raises:
            BadRequestError: data is empty
            NotFoundError: no job with that id
        """
        self.logger.record_operation("update")
        set_clause = compile_set_clause(data, JOB_COLUMNS)
        id_idx = f"${len(set_clause.values) + 1}"

        rows = self.db.execute(
            f"""UPDATE jobs
                SET {set_clause.set_cols}
                WHERE id = {id_idx}
                RETURNING {select_list(JOB_FIELDS, JOB_COLUMNS)}""",
            [*set_clause.values, job_id],
        )
        if not rows:
            raise self._not_found(job_id)

        self.logger.info("Job updated", id=job_id, fields=list(data.keys()))
        return _shape_job(rows[0])

    def remove(self, job_id: int) -> None:
        """
        Delete a job. The owning company is left untouched.

        Raises:
            NotFoundError: no job with that id
        """
        self.logger.record_operation("remove")
        rows = self.db.execute(
            """DELETE FROM jobs
                WHERE id = $1
                RETURNING id""",
            [job_id],
        )
        if not rows:
            raise self._not_found(job_id)

        self.logger.info("Job removed", id=job_id)

    def _not_found(self, job_id: Any) -> NotFoundError:
        self.logger.record_error("NotFoundError")
        self.logger.warning("Job not found", id=job_id)
        return NotFoundError(f"No job: {job_id}", identifier=job_id)
