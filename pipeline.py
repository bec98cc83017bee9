from typing import List, Optional, Protocol

from config import Settings
from formatting import format_results
from hints import extract_limit, extract_time_range
from kql_generator import KQLGenerator
from log_analytics import LogAnalyticsExecutor
from models import QueryOutcome, QueryRequest, ResultTable


class Translator(Protocol):
    async def generate_query(self, question: str, time_range: Optional[str] = None) -> str: ...


class LogsBackend(Protocol):
    async def execute(self, kql: str, limit: Optional[int] = None) -> List[ResultTable]: ...


class QueryPipeline:
    """Question -> KQL -> result tables -> text, one step after the other."""

    def __init__(self, translator: Translator, backend: LogsBackend):
        self.translator = translator
        self.backend = backend

    @staticmethod
    def build_request(
        text: str, time_range: Optional[str] = None, limit: Optional[int] = None
    ) -> QueryRequest:
        """Explicit hints win; otherwise they are extracted from the text."""
        return QueryRequest(
            raw_text=text,
            time_range=time_range if time_range is not None else extract_time_range(text),
            limit=limit if limit is not None else extract_limit(text),
        )

    async def translate(self, request: QueryRequest) -> str:
        return await self.translator.generate_query(request.raw_text, request.time_range)

    async def execute(self, kql: str, limit: Optional[int] = None) -> str:
        return format_results(await self.backend.execute(kql, limit))

    async def run(self, request: QueryRequest) -> QueryOutcome:
        kql = await self.translate(request)
        return QueryOutcome(kql=kql, results=await self.execute(kql, request.limit))

    async def aclose(self):
        close = getattr(self.backend, "close", None)
        if close is not None:
            await close()


def create_pipeline(settings: Settings) -> QueryPipeline:
    translator = KQLGenerator(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_tokens=settings.max_tokens,
    )
    backend = LogAnalyticsExecutor(target=settings.target, timespan=settings.query_timespan)
    return QueryPipeline(translator, backend)
