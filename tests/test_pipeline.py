from datetime import timedelta

from conftest import FakeBackend, FakeTranslator
from langchain_anthropic import ChatAnthropic

from config import LogAnalyticsTarget, Settings
from kql_generator import KQLGenerator
from log_analytics import LogAnalyticsExecutor
from models import ExecutionError, QueryRequest
from pipeline import QueryPipeline, create_pipeline


def test_build_request_extracts_hints():
    request = QueryPipeline.build_request("top 5 errors in the last 3 days")

    assert request == QueryRequest(
        raw_text="top 5 errors in the last 3 days",
        time_range="in the last 3 days",
        limit=5,
    )


def test_build_request_explicit_values_win():
    request = QueryPipeline.build_request("top 5 errors in the last 3 days", "past week", 20)

    assert request.time_range == "past week"
    assert request.limit == 20


def test_build_request_without_hints():
    request = QueryPipeline.build_request("show errors")

    assert request.time_range is None
    assert request.limit is None


async def test_run_feeds_each_step(pipeline, translator, backend):
    request = QueryPipeline.build_request("top 5 errors in the last 3 days")

    outcome = await pipeline.run(request)

    assert translator.calls == [("top 5 errors in the last 3 days", "in the last 3 days")]
    assert backend.calls == [("traces | take 10", 5)]
    assert outcome.kql == "traces | take 10"
    assert "(2 rows)" in outcome.results


async def test_run_propagates_execution_error():
    backend = FakeBackend(error=ExecutionError("Query failed with status: Failure"))
    pipeline = QueryPipeline(FakeTranslator(), backend)

    try:
        await pipeline.run(QueryRequest(raw_text="errors"))
    except ExecutionError as e:
        assert "Failure" in e.message
    else:
        raise AssertionError("ExecutionError not raised")


async def test_aclose_closes_backend(pipeline, backend):
    await pipeline.aclose()

    assert backend.closed


async def test_execute_with_no_tables():
    pipeline = QueryPipeline(FakeTranslator(), FakeBackend([]))

    assert await pipeline.execute("traces") == "No results found."


async def test_create_pipeline_wires_sdk_clients():
    settings = Settings(
        anthropic_api_key="sk-test",
        target=LogAnalyticsTarget(resource_name="app"),
        query_timespan=timedelta(hours=6),
    )

    pipeline = create_pipeline(settings)
    try:
        assert isinstance(pipeline.translator, KQLGenerator)
        llm = pipeline.translator.llm
        assert isinstance(llm, ChatAnthropic)
        assert llm.model == "claude-3-7-sonnet-20250219"
        assert llm.max_tokens == 1024
        assert llm.max_retries == 0

        assert isinstance(pipeline.backend, LogAnalyticsExecutor)
        assert pipeline.backend.target.resource_id.endswith("/components/app")
        assert pipeline.backend.timespan == timedelta(hours=6)
    finally:
        await pipeline.aclose()
