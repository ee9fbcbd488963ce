from .companies import COMPANY_COLUMNS, CompanyRepository
from .jobs import JOB_COLUMNS, JobFilters, JobRepository

__all__ = [
    "COMPANY_COLUMNS",
    "CompanyRepository",
    "JOB_COLUMNS",
    "JobFilters",
    "JobRepository",
]
