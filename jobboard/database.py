"""
Database schema and query execution.

Tables are declared with SQLAlchemy models; statements are plain SQL text
with positional placeholders ($1, $2, ...) executed through an engine.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .env import get_database_url, load_env
from .logger import StructuredLogger, get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")


class Company(Base):
    """Company that owns job postings."""

    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite file databases get their parent directory created and foreign
    key enforcement switched on for every connection.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(db_url)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(db_url)


def init_database(db_url: str) -> None:
    """
    Initialize database and create tables.

    Args:
        db_url: SQLAlchemy database URL
    """
    engine = get_engine(db_url)
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_url: str):
    """
    Get database session.

    Args:
        db_url: SQLAlchemy database URL

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_url))
    return Session()


def bind_positional(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $n placeholders as SQLAlchemy named binds.

    bind_positional("SELECT $1, $2", ["a", 3]) -> ("SELECT :p1, :p2", {"p1": "a", "p2": 3})
    """
    bound = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    return bound, {f"p{i}": value for i, value in enumerate(params, 1)}


class Database:
    """Query execution primitive: SQL text plus ordered parameters in, rows out."""

    def __init__(self, db_url: str, logger: Optional[StructuredLogger] = None):
        self.url = db_url
        self.engine = get_engine(db_url)
        self.logger = logger or get_logger()

    @classmethod
    def from_env(cls) -> "Database":
        load_env()
        return cls(get_database_url())

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """
        Execute one statement in its own transaction.

        Args:
            sql: Statement text using $1, $2, ... placeholders
            params: Values bound to the placeholders in order

        Returns:
            Rows as dicts keyed by result column name ([] for statements
            that return no rows)
        """
        statement, binds = bind_positional(sql, params)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), binds)
                rows = [dict(row._mapping) for row in result] if result.returns_rows else []
        except SQLAlchemyError as e:
            self.logger.record_query_failure(type(e).__name__)
            self.logger.error("Statement failed", error_type=type(e).__name__, error=str(e))
            raise

        self.logger.record_query(len(rows))
        self.logger.debug("Statement executed", sql=" ".join(sql.split()), rows=len(rows))
        return rows

    def dispose(self) -> None:
        self.engine.dispose()
