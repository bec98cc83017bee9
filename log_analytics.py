import logging
from datetime import timedelta
from typing import List, Optional

from azure.core.exceptions import AzureError
from azure.identity.aio import AzureCliCredential
from azure.monitor.query import LogsQueryStatus
from azure.monitor.query.aio import LogsQueryClient

from config import LogAnalyticsTarget
from models import ExecutionError, ResultTable

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Azure App Insights query error"


def apply_limit(kql: str, limit: Optional[int] = None) -> str:
    """Append a ``| limit N`` stage. Existing limit stages are left alone."""
    return f"{kql} | limit {limit}" if limit else kql


def _status_name(status) -> str:
    return str(getattr(status, "value", status))


class LogAnalyticsExecutor:
    """Runs KQL against one Application Insights component."""

    def __init__(
        self,
        target: Optional[LogAnalyticsTarget] = None,
        timespan: timedelta = timedelta(days=1),
        client=None,
        credential=None,
    ):
        self.target = target or LogAnalyticsTarget()
        self.timespan = timespan
        self._credential = credential
        if client is None:
            self._credential = credential or AzureCliCredential()
            client = LogsQueryClient(self._credential)
        self._client = client

    async def execute(self, kql: str, limit: Optional[int] = None) -> List[ResultTable]:
        query = apply_limit(kql, limit)
        resource_id = self.target.resource_id
        logger.info("Querying App Insights resource: %s", resource_id)

        try:
            response = await self._client.query_resource(resource_id, query, timespan=self.timespan)
        except AzureError as e:
            raise ExecutionError(f"{ERROR_PREFIX}: {e}") from e

        if response.status != LogsQueryStatus.SUCCESS:
            raise ExecutionError(
                f"{ERROR_PREFIX}: Query failed with status: {_status_name(response.status)}"
            )

        return [ResultTable.from_logs_table(table) for table in response.tables]

    async def close(self):
        await self._client.close()
        if self._credential is not None:
            await self._credential.close()
