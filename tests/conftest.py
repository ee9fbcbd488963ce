"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List

from jobboard.database import Company, Database, get_session, init_database
from jobboard.logger import StructuredLogger, reset_logger


@pytest.fixture(autouse=True)
def fresh_global_logger():
    """Keep the process-wide logger from leaking between tests."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def test_logger() -> StructuredLogger:
    return StructuredLogger(name="jobboard-test", level="DEBUG", enable_file=False, enable_console=False)


@pytest.fixture
def db_url(tmp_path) -> str:
    """URL of an empty, initialized SQLite database."""
    url = f"sqlite:///{tmp_path / 'jobboard.db'}"
    init_database(url)
    return url


@pytest.fixture
def db(db_url, test_logger):
    database = Database(db_url, logger=test_logger)
    yield database
    database.dispose()


@pytest.fixture
def companies(db_url) -> List[Dict[str, Any]]:
    """Three companies: c1, c2, c3."""
    rows = [
        {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
        {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
        {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"},
    ]
    session = get_session(db_url)
    for row in rows:
        session.add(Company(
            handle=row["handle"],
            name=row["name"],
            description=row["description"],
            num_employees=row["numEmployees"],
            logo_url=row["logoUrl"],
        ))
    session.commit()
    session.close()
    return rows


@pytest.fixture
def job_ids(db, companies) -> List[int]:
    """Four c1 jobs: Job1..Job4 with equity 0.1, 0.2, 0 and NULL."""
    seed = [
        ("Job1", 100, "0.1"),
        ("Job2", 200, "0.2"),
        ("Job3", 300, "0"),
        ("Job4", None, None),
    ]
    ids = []
    for title, salary, equity in seed:
        rows = db.execute(
            "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, 'c1') RETURNING id",
            [title, salary, equity],
        )
        ids.append(rows[0]["id"])
    return ids
