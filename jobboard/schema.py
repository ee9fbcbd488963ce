import re
from typing import Any, Dict, List, Mapping

from .errors import BadRequestError
from .repositories.jobs import JobFilters

NEW_JOB_REQUIRED = ["title", "companyHandle"]
JOB_FIELDS = {"title", "salary", "equity", "companyHandle"}

# decimal string between 0 and 1 inclusive
_EQUITY_RE = re.compile(r"0(\.\d+)?|1(\.0+)?|\.\d+")


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _field_errors(data: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []

    for f in sorted(set(data) - JOB_FIELDS):
        errors.append(f"Unknown field: {f}")

    for f in ("title", "companyHandle"):
        if f in data and not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    if data.get("salary") is not None:
        salary = data["salary"]
        # bool is an int subclass
        if isinstance(salary, bool) or not isinstance(salary, int) or salary < 0:
            errors.append("Field 'salary' must be a non-negative integer")

    if data.get("equity") is not None:
        equity = data["equity"]
        if not isinstance(equity, str) or not _EQUITY_RE.fullmatch(equity):
            errors.append("Field 'equity' must be a decimal string between 0 and 1")

    return errors


def validate_new_job(data: Mapping[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []
    for f in NEW_JOB_REQUIRED:
        if f not in data:
            errors.append(f"Missing required field: {f}")
    errors.extend(_field_errors(data))
    return errors


def validate_job_update(data: Mapping[str, Any]) -> List[str]:
    """Same per-field rules as validate_new_job; every field is optional."""
    return _field_errors(data)


def ensure_valid(errors: List[str]) -> None:
    if errors:
        raise BadRequestError("; ".join(errors), errors=errors)


def parse_job_filters(query: Mapping[str, str]) -> JobFilters:
    """
    Build JobFilters from query-string values.

    minSalary must parse as an integer; hasEquity is only set for "true".
    """
    payload: Dict[str, Any] = {}

    if query.get("title") is not None:
        payload["title"] = query["title"]

    if query.get("minSalary") is not None:
        try:
            payload["minSalary"] = int(query["minSalary"])
        except (TypeError, ValueError):
            raise BadRequestError(
                "minSalary must be an integer",
                errors=[f"Invalid minSalary: {query['minSalary']}"],
            )

    if query.get("hasEquity") == "true":
        payload["hasEquity"] = True

    return JobFilters.from_payload(payload)
