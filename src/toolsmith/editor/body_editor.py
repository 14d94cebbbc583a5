"""Server-rendered body-parameter editor for REST API queries.

The editor is a header (title, add-row control, raw JSON toggle) over a
content area showing either key/value rows or a JSON editor. The toggle is
its only state; every other prop is handed to the templates untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

_TEMPLATES_DIR = Path(__file__).parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass
class BodyEditor:
    options: list[list[str]] = field(default_factory=list)
    current_state: dict[str, Any] = field(default_factory=dict)
    theme: str = "light"
    component_name: str = "restapi"
    json_body: str | None = None
    body_toggle: bool = False

    def set_body_toggle(self, value: bool) -> None:
        self.body_toggle = value

    def render(self) -> str:
        """Render the header and content area as one HTML fragment."""
        template = _env.get_template("tab_body.html.j2")
        return template.render(
            param_type="body",
            tab_type="body",
            desc_text="Body Parameters",
            options=self.options,
            current_state=self.current_state,
            theme=self.theme,
            component_name=self.component_name,
            json_body=self.json_body or "",
            body_toggle=self.body_toggle,
        )
