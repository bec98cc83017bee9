from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class QueryRequest(BaseModel):
    """A single natural language question plus the hints pulled out of it."""

    model_config = ConfigDict(frozen=True)

    raw_text: str
    time_range: Optional[str] = None
    limit: Optional[int] = None


class ResultColumn(BaseModel):
    name: str


class ResultTable(BaseModel):
    """One table of a query result set. Every row has one cell per column."""

    columns: List[ResultColumn]
    rows: List[List[Any]] = []

    @classmethod
    def from_logs_table(cls, table) -> "ResultTable":
        # azure-monitor-query exposes column names as plain strings
        return cls(
            columns=[ResultColumn(name=str(name)) for name in table.columns],
            rows=[list(row) for row in table.rows],
        )


class QueryOutcome(BaseModel):
    kql: str
    results: str


class LogQueryError(Exception):
    """Base class for failures surfaced to the front ends."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TranslationError(LogQueryError):
    """The language model call failed or returned nothing usable."""


class ExecutionError(LogQueryError):
    """The log query call failed or did not complete successfully."""
