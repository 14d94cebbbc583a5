"""Abstract base class and result type for data-source query services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from toolsmith.models.enums import QueryStatus


class QueryResult(BaseModel):
    """Normalized outcome of one plugin query."""

    status: QueryStatus = QueryStatus.OK
    data: Any = None


class QueryService(ABC):
    """Translates a query operation descriptor into one outbound API call."""

    plugin_kind: str = "unknown"

    @abstractmethod
    async def run(
        self,
        source_options: dict,
        query_options: dict,
        data_source_id: str | None = None,
    ) -> QueryResult:
        """Run the query described by ``query_options``.

        Args:
            source_options: Data-source level settings, e.g. credentials.
            query_options: The operation descriptor for this call.
            data_source_id: Opaque identifier of the calling data source.

        Returns:
            The normalized result.

        Raises:
            QueryError: On any failure.
        """
        ...
