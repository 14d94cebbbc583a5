"""Data query execution routes."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from toolsmith.dependencies import CurrentUser
from toolsmith.errors.exceptions import ValidationError
from toolsmith.plugins import AVAILABLE_PLUGINS, import_plugin
from toolsmith.plugins.base import QueryResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/data_queries", tags=["DataQueries"])


class RunQueryRequest(BaseModel):
    kind: str
    source_options: dict = Field(default_factory=dict)
    query_options: dict = Field(default_factory=dict)
    data_source_id: str | None = None


@router.post("/run", response_model=QueryResult)
async def run_query(body: RunQueryRequest, user: CurrentUser):
    dotted_path = AVAILABLE_PLUGINS.get(body.kind)
    if dotted_path is None:
        raise ValidationError(f"Unknown data source kind: {body.kind}")

    service = import_plugin(dotted_path)()
    logger.info(
        "Running %s query for user %s (data source %s)",
        body.kind,
        user.id,
        body.data_source_id,
    )
    return await service.run(body.source_options, body.query_options, body.data_source_id)
