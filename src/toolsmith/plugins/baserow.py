"""Baserow data-source plugin: row and field operations via the Baserow REST API."""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from toolsmith.errors.exceptions import QueryError
from toolsmith.models.enums import BaserowOperation, QueryStatus
from toolsmith.plugins.base import QueryResult, QueryService

logger = logging.getLogger(__name__)

BASEROW_API_URL = "https://api.baserow.io"

ROW_OPERATIONS = {
    BaserowOperation.GET_ROW,
    BaserowOperation.UPDATE_ROW,
    BaserowOperation.MOVE_ROW,
    BaserowOperation.DELETE_ROW,
}


class BaserowSourceOptions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    api_token: str


class BaserowQueryOptions(BaseModel):
    """Operation descriptor; ``body`` is a JSON document in string form."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    operation: BaserowOperation
    table_id: str
    row_id: str | None = None
    before_id: str | None = None
    body: str | None = None

    @model_validator(mode="after")
    def _require_row_id(self) -> "BaserowQueryOptions":
        if self.operation in ROW_OPERATIONS and not self.row_id:
            raise ValueError(f"row_id is required for {self.operation.value}")
        return self


class BaserowQueryService(QueryService):
    """Forwards one query to Baserow per ``run`` call.

    ``transport`` is handed to ``httpx.AsyncClient`` and exists so callers can
    route requests elsewhere (tests use ``httpx.MockTransport``).
    """

    plugin_kind: str = "baserow"

    def __init__(
        self,
        base_url: str = BASEROW_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @staticmethod
    def auth_header(token: str) -> dict[str, str]:
        return {"Authorization": f"Token {token}", "Content-Type": "application/json"}

    async def run(
        self,
        source_options: dict,
        query_options: dict,
        data_source_id: str | None = None,
    ) -> QueryResult:
        try:
            source = BaserowSourceOptions.model_validate(source_options)
            query = BaserowQueryOptions.model_validate(query_options)
            async with httpx.AsyncClient(
                transport=self._transport, follow_redirects=True
            ) as client:
                result = await self._dispatch(client, source, query)
        except Exception as exc:
            logger.error(
                "Baserow query failed for data source %s: %s", data_source_id, exc
            )
            raise QueryError("Query could not be completed", str(exc)) from exc

        return QueryResult(status=QueryStatus.OK, data=result)

    async def _dispatch(
        self,
        client: httpx.AsyncClient,
        source: BaserowSourceOptions,
        query: BaserowQueryOptions,
    ) -> dict | list:
        headers = self.auth_header(source.api_token)
        rows_url = f"{self.base_url}/api/database/rows/table/{query.table_id}"
        named = {"user_field_names": "true"}
        op = query.operation

        if op == BaserowOperation.LIST_ROWS:
            response = await client.get(f"{rows_url}/", params=named, headers=headers)
        elif op == BaserowOperation.LIST_FIELDS:
            response = await client.get(
                f"{self.base_url}/api/database/fields/table/{query.table_id}/",
                params=named,
                headers=headers,
            )
        elif op == BaserowOperation.GET_ROW:
            response = await client.get(f"{rows_url}/{query.row_id}/", params=named, headers=headers)
        elif op == BaserowOperation.CREATE_ROW:
            response = await client.post(
                f"{rows_url}/", params=named, headers=headers, json=json.loads(query.body)
            )
        elif op == BaserowOperation.UPDATE_ROW:
            response = await client.patch(
                f"{rows_url}/{query.row_id}/",
                params=named,
                headers=headers,
                json=json.loads(query.body),
            )
        elif op == BaserowOperation.MOVE_ROW:
            params = dict(named)
            if query.before_id is not None:
                params["before_id"] = query.before_id
            response = await client.patch(
                f"{rows_url}/{query.row_id}/move/", params=params, headers=headers
            )
        else:
            response = await client.delete(f"{rows_url}/{query.row_id}", headers=headers)
            response.raise_for_status()
            # Only 204 No Content confirms the delete; the result is empty either way.
            if response.status_code == 204:
                logger.debug("Deleted row %s from table %s", query.row_id, query.table_id)
            return {}

        response.raise_for_status()
        return response.json()
