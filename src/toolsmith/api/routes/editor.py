"""Query editor fragments rendered server-side."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from toolsmith.editor.body_editor import BodyEditor

router = APIRouter(prefix="/editor", tags=["Editor"])


class BodyEditorProps(BaseModel):
    options: list[list[str]] = Field(default_factory=list)
    current_state: dict = Field(default_factory=dict)
    theme: str = "light"
    component_name: str = "restapi"
    json_body: str | None = None
    body_toggle: bool = False


@router.post("/rest_api/body", response_class=HTMLResponse)
async def render_body_editor(props: BodyEditorProps) -> str:
    return BodyEditor(**props.model_dump()).render()
