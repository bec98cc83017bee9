import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from config import configure_logging, load_settings, require_api_key
from models import LogQueryError, QueryRequest
from pipeline import QueryPipeline, create_pipeline

logger = logging.getLogger(__name__)

SERVER_NAME = "azure-log-analytics-mcp"


async def run_query_logs(
    pipeline: QueryPipeline,
    query: str,
    time_range: Optional[str] = None,
    limit: Optional[int] = None,
) -> str:
    """
    Translate ``query`` to KQL, run it, and return the KQL plus the result table.
    Failures are raised as ToolError so the host gets an error-flagged result.
    """
    logger.info("Processing query: %s", query)
    request = QueryRequest(raw_text=query, time_range=time_range, limit=limit)
    try:
        outcome = await pipeline.run(request)
    except LogQueryError as e:
        logger.error("Error processing query: %s", e.message)
        raise ToolError(f"Error: {e.message}") from e
    logger.info("Generated KQL Query: %s", outcome.kql)
    return f"Query executed: {outcome.kql}\n\n{outcome.results}"


def build_server(pipeline: QueryPipeline) -> FastMCP:
    mcp = FastMCP(SERVER_NAME)

    # -------- Tools --------
    @mcp.tool(name="query_logs", description="Query Azure Log Analytics using natural language")
    async def query_logs(
        query: Annotated[str, Field(description="Natural language query about trace logs")],
        timeRange: Annotated[
            Optional[str],
            Field(description='Optional time range (e.g., "last 24 hours", "past week")'),
        ] = None,
        limit: Annotated[
            Optional[int],
            Field(description="Maximum number of results to return (a whole number)"),
        ] = None,
    ) -> str:
        return await run_query_logs(pipeline, query, timeRange, limit)

    return mcp


def main():
    settings = load_settings()
    configure_logging(settings)
    require_api_key(settings)

    mcp = build_server(create_pipeline(settings))

    if settings.mcp_transport == "stdio":
        logger.info("Azure Log Analytics MCP server running on stdio")
        mcp.run()
    else:
        logger.info(
            "Starting MCP server on %s:%s (%s)",
            settings.mcp_host,
            settings.mcp_port,
            settings.mcp_transport,
        )
        mcp.run(transport=settings.mcp_transport, host=settings.mcp_host, port=settings.mcp_port)


if __name__ == "__main__":
    main()
