"""Configuration keys, constants and plugin settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from teams_notifier.context import Context

# Plugin options
ENV_WEBHOOK_URL = "PLUGIN_WEBHOOK_URL"
ENV_DEBUG = "PLUGIN_DEBUG"
ENV_STATUS = "PLUGIN_STATUS"
ENV_FACTS = "PLUGIN_FACTS"
ENV_BUTTONS = "PLUGIN_BUTTONS"
ENV_VARIABLES = "PLUGIN_VARIABLES"

# Pipeline metadata provided by the CI runner
ENV_BUILD_STATUS = "DRONE_BUILD_STATUS"
ENV_COMMIT_TAG = "CI_COMMIT_TAG"
ENV_COMMIT_SHA = "CI_COMMIT_SHA"
ENV_COMMIT_AUTHOR = "CI_COMMIT_AUTHOR"
ENV_COMMIT_AUTHOR_AVATAR = "CI_COMMIT_AUTHOR_AVATAR"
ENV_COMMIT_MESSAGE = "CI_COMMIT_MESSAGE"
ENV_REPO = "CI_REPO"
ENV_REPO_URL = "CI_REPO_URL"
ENV_PIPELINE_URL = "CI_PIPELINE_URL"
ENV_PIPELINE_FORGE_URL = "CI_PIPELINE_FORGE_URL"

ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_VERSION = "1.5"
DELIVERY_CONTENT_TYPE = "application/json"

SHORT_SHA_LENGTH = 7
CARD_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def split_list(value: str) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty names."""
    return [item.strip() for item in value.split(",") if item.strip()]


class PluginSettings(BaseModel):
    webhook_url: str = ""
    debug: bool = False
    build_status: str = ""
    status_override: str = ""
    facts: list[str] | None = None
    buttons: list[str] | None = None
    variables: list[str] = Field(default_factory=list)

    @field_validator("facts", "buttons", mode="before")
    @classmethod
    def parse_selection(cls, v: str | list[str] | None) -> list[str] | None:
        if isinstance(v, str):
            return split_list(v)
        return v

    @field_validator("variables", mode="before")
    @classmethod
    def parse_variables(cls, v: str | list[str] | None) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return split_list(v)
        return v

    @property
    def status(self) -> str:
        return self.status_override or self.build_status

    @classmethod
    def from_context(cls, context: Context) -> PluginSettings:
        return cls(
            webhook_url=context.get(ENV_WEBHOOK_URL),
            debug=context.get(ENV_DEBUG, "false") == "true",
            build_status=context.get(ENV_BUILD_STATUS),
            status_override=context.get(ENV_STATUS),
            facts=context.get(ENV_FACTS) or None,
            buttons=context.get(ENV_BUTTONS) or None,
            variables=context.get(ENV_VARIABLES),
        )
