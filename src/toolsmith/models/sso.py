"""SSO configuration payloads as a tagged variant keyed by ``sso``.

Stored ``configs`` JSON is loose; these models are the only recognized
shapes. Unknown keys are ignored on read so nothing unexpected leaks into
redacted output.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

SECRET_FIELDS = {"client_secret"}


class FormSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GoogleSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    client_id: str | None = None
    client_secret: str | None = None


class GitSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    client_id: str | None = None
    client_secret: str | None = None
    host_name: str | None = None


class FormSSOConfig(BaseModel):
    sso: Literal["form"] = "form"
    enabled: bool = True
    configs: FormSettings = Field(default_factory=FormSettings)


class GoogleSSOConfig(BaseModel):
    sso: Literal["google"] = "google"
    enabled: bool = False
    configs: GoogleSettings = Field(default_factory=GoogleSettings)


class GitSSOConfig(BaseModel):
    sso: Literal["git"] = "git"
    enabled: bool = False
    configs: GitSettings = Field(default_factory=GitSettings)


SSOConfigView = Annotated[
    Union[FormSSOConfig, GoogleSSOConfig, GitSSOConfig],
    Field(discriminator="sso"),
]

sso_config_adapter: TypeAdapter[SSOConfigView] = TypeAdapter(SSOConfigView)

_SETTINGS_BY_KIND: dict[str, type[BaseModel]] = {
    "form": FormSettings,
    "google": GoogleSettings,
    "git": GitSettings,
}


def normalize_settings(kind: str, configs: dict | None) -> dict:
    """Coerce an incoming ``configs`` mapping into the stored shape for ``kind``."""
    model = _SETTINGS_BY_KIND[kind]
    return model.model_validate(configs or {}).model_dump(exclude_none=True)


def redact(view: FormSSOConfig | GoogleSSOConfig | GitSSOConfig) -> dict:
    """Dump a config without its secret fields."""
    return view.model_dump(exclude={"configs": SECRET_FIELDS}, exclude_none=True)
