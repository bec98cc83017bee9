import logging
import os
import sys
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_LOG_LEVEL = "INFO"
# per-request loggers of the SDKs, kept out of the REPL output
QUIET_LOGGERS = ("azure", "httpx")


class LogAnalyticsTarget(BaseModel):
    """The Application Insights component every query runs against."""

    subscription_id: str = "cdc73b10-2ecb-4bb3-83fe-b1e50a1fa409"
    resource_group: str = "dev-rg-ncus-cocodraft"
    resource_name: str = "dev-askdi-flows"

    @property
    def resource_id(self) -> str:
        return (
            f"/subscriptions/{self.subscription_id}"
            f"/resourceGroups/{self.resource_group}"
            f"/providers/Microsoft.Insights/components/{self.resource_name}"
        )


class Settings(BaseModel):
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    target: LogAnalyticsTarget = LogAnalyticsTarget()
    # window passed to the query service, separate from any ago(...) in the KQL
    query_timespan: timedelta = timedelta(days=1)
    mcp_transport: str = "stdio"
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8765
    log_level: Optional[str] = None


def load_settings() -> Settings:
    """Build settings from the environment, after loading a .env file if present."""
    load_dotenv()

    defaults = Settings()
    target_defaults = defaults.target
    target = LogAnalyticsTarget(
        subscription_id=os.getenv("AZURE_SUBSCRIPTION_ID", target_defaults.subscription_id),
        resource_group=os.getenv("AZURE_RESOURCE_GROUP", target_defaults.resource_group),
        resource_name=os.getenv("APP_INSIGHTS_NAME", target_defaults.resource_name),
    )

    timespan = defaults.query_timespan
    hours = os.getenv("LOG_QUERY_TIMESPAN_HOURS")
    if hours:
        timespan = timedelta(hours=float(hours))

    return Settings(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        anthropic_model=os.getenv("ANTHROPIC_MODEL", defaults.anthropic_model),
        max_tokens=int(os.getenv("ANTHROPIC_MAX_TOKENS", defaults.max_tokens)),
        target=target,
        query_timespan=timespan,
        mcp_transport=os.getenv("MCP_TRANSPORT", defaults.mcp_transport),
        mcp_host=os.getenv("MCP_HOST", defaults.mcp_host),
        mcp_port=int(os.getenv("MCP_PORT", defaults.mcp_port)),
        log_level=os.getenv("LOG_LEVEL") or None,
    )


def require_api_key(settings: Settings) -> str:
    if not settings.anthropic_api_key:
        print("Error: ANTHROPIC_API_KEY environment variable is required", file=sys.stderr)
        sys.exit(1)
    return settings.anthropic_api_key


def configure_logging(settings: Settings):
    logging.basicConfig(level=(settings.log_level or DEFAULT_LOG_LEVEL).upper(), stream=sys.stderr)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
