from typing import List, Optional

import pytest

from models import ResultColumn, ResultTable, TranslationError
from pipeline import QueryPipeline


class FakeTranslator:
    def __init__(self, kql="traces | take 10", error=None):
        self.kql = kql
        self.error = error
        self.calls = []

    async def generate_query(self, question: str, time_range: Optional[str] = None) -> str:
        self.calls.append((question, time_range))
        if self.error:
            raise self.error
        return self.kql


class FakeBackend:
    def __init__(self, tables: Optional[List[ResultTable]] = None, error=None):
        self.tables = tables or []
        self.error = error
        self.calls = []
        self.closed = False

    async def execute(self, kql: str, limit: Optional[int] = None) -> List[ResultTable]:
        self.calls.append((kql, limit))
        if self.error:
            raise self.error
        return self.tables

    async def close(self):
        self.closed = True


@pytest.fixture
def traces_table():
    return ResultTable(
        columns=[ResultColumn(name="timestamp"), ResultColumn(name="severityLevel")],
        rows=[["2024-01-01T00:00:00Z", "Error"], [None, "Warning"]],
    )


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def backend(traces_table):
    return FakeBackend([traces_table])


@pytest.fixture
def pipeline(translator, backend):
    return QueryPipeline(translator, backend)


@pytest.fixture
def failing_translator():
    return FakeTranslator(error=TranslationError("Anthropic API Error: 401 - {}"))
