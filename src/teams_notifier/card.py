"""Card builder that turns pipeline metadata into an Adaptive Card."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, NamedTuple, TypeVar

from teams_notifier.avatar import AvatarFetchError, fetch_avatar_data_uri
from teams_notifier.config import (
    CARD_TIMESTAMP_FORMAT,
    ENV_COMMIT_AUTHOR,
    ENV_COMMIT_AUTHOR_AVATAR,
    ENV_COMMIT_MESSAGE,
    ENV_COMMIT_SHA,
    ENV_COMMIT_TAG,
    ENV_PIPELINE_FORGE_URL,
    ENV_PIPELINE_URL,
    ENV_REPO,
    ENV_REPO_URL,
    SHORT_SHA_LENGTH,
    PluginSettings,
)
from teams_notifier.context import Context
from teams_notifier.models import (
    AdaptiveCard,
    Attachment,
    ButtonName,
    CardElement,
    Column,
    ColumnSet,
    Container,
    Fact,
    FactName,
    FactSet,
    Image,
    Message,
    OpenUrlAction,
    Table,
    TableCell,
    TableColumn,
    TableRow,
    TextBlock,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StatusStyle(NamedTuple):
    color: str
    title: str


FAILED = StatusStyle(color="attention", title="❌ Pipeline failed")
SUCCEEDED = StatusStyle(color="good", title="✔ Pipeline succeeded")


def status_style(status: str) -> StatusStyle:
    """Only ``failure`` is treated as failed; every other value succeeds."""
    if status == "failure":
        return FAILED
    return SUCCEEDED


def resolve_version(context: Context) -> str:
    tag = context.get(ENV_COMMIT_TAG)
    if tag:
        return tag
    sha = context.get(ENV_COMMIT_SHA)
    if sha:
        return sha[:SHORT_SHA_LENGTH]
    return ""


def select_entries(catalog: dict[str, T], requested: list[str] | None) -> list[T]:
    """Filter and order catalog entries by ``requested`` names.

    With no request every entry is returned in catalog order. Unknown names
    are dropped.
    """
    if requested is None:
        return list(catalog.values())
    return [catalog[name] for name in requested if name in catalog]


def monospace_cell(text: str) -> TableCell:
    return TableCell(
        items=[
            TextBlock(text=text, wrap=True, weight="Default", font_type="Monospace"),
        ]
    )


class CardBuilder:
    """Builds the notification card for one pipeline run."""

    def __init__(
        self,
        context: Context,
        settings: PluginSettings | None = None,
        fetch_avatar: Callable[[str], str] = fetch_avatar_data_uri,
        now: datetime | None = None,
    ) -> None:
        self.context = context
        self.settings = settings or PluginSettings.from_context(context)
        self.fetch_avatar = fetch_avatar
        self.now = now or datetime.now(timezone.utc)
        self.version = resolve_version(context)

    @property
    def timestamp(self) -> str:
        return self.now.astimezone(timezone.utc).strftime(CARD_TIMESTAMP_FORMAT)

    def build(self) -> Message:
        card = AdaptiveCard(body=self.build_body(), actions=self.build_actions())
        return Message(attachments=[Attachment(content=card)])

    def build_body(self) -> list[CardElement]:
        if self.settings.status_override:
            logger.info(f"Overriding status to: {self.settings.status_override}")
        style = status_style(self.settings.status)

        body: list[CardElement] = [
            Container(
                bleed=True,
                spacing="None",
                style=style.color,
                items=[
                    TextBlock(
                        text=style.title,
                        weight="bolder",
                        size="medium",
                        color=style.color,
                    ),
                    self.build_author_section(self.resolve_avatar()),
                ],
            )
        ]

        facts = self.build_facts_section()
        if facts is not None:
            body.append(facts)

        body.extend(self.build_variables_section())
        return body

    def resolve_avatar(self) -> str:
        avatar_url = self.context.get(ENV_COMMIT_AUTHOR_AVATAR)
        if not avatar_url:
            return ""
        try:
            return self.fetch_avatar(avatar_url)
        except AvatarFetchError as e:
            logger.warning(f"Failed to process avatar image: {e}")
            return avatar_url

    def build_author_section(self, avatar: str) -> ColumnSet:
        timestamp = self.timestamp
        return ColumnSet(
            columns=[
                Column(
                    width="auto",
                    items=[Image(url=avatar, size="small", style="Person")],
                ),
                Column(
                    width="stretch",
                    items=[
                        TextBlock(
                            text="@" + self.context.get(ENV_COMMIT_AUTHOR),
                            weight="bolder",
                            wrap=True,
                        ),
                        TextBlock(
                            text=f"{{{{DATE({timestamp}, SHORT)}}}} at {{{{TIME({timestamp})}}}}",
                            spacing="None",
                            is_subtle=True,
                            wrap=True,
                        ),
                    ],
                ),
            ]
        )

    def build_facts_section(self) -> Container | None:
        message = self.context.get(ENV_COMMIT_MESSAGE)
        catalog = {
            FactName.PROJECT.value: Fact(title="Project:", value=self.context.get(ENV_REPO)),
            FactName.MESSAGE.value: Fact(title="Message:", value=message.split("\n", 1)[0].rstrip("\r")),
            FactName.VERSION.value: Fact(title="Version:", value=self.version),
        }

        facts = select_entries(catalog, self.settings.facts)
        if not facts:
            return None

        return Container(items=[FactSet(facts=facts)])

    def build_variables_section(self) -> list[CardElement]:
        if not self.settings.variables:
            return []

        rows = [
            TableRow(
                cells=[monospace_cell(name), monospace_cell(self.context.get(name))],
                style="default",
            )
            for name in self.settings.variables
        ]

        return [
            TextBlock(text="Variables:", weight="bolder", wrap=True),
            Table(
                columns=[TableColumn(width=1), TableColumn(width=2)],
                rows=rows,
                spacing="Small",
                show_grid_lines=False,
                first_row_as_headers=False,
            ),
        ]

    def build_actions(self) -> list[OpenUrlAction]:
        catalog = {
            ButtonName.PIPELINE.value: OpenUrlAction(
                title="View Pipeline",
                url=self.context.get(ENV_PIPELINE_URL),
            ),
        }

        tag = self.context.get(ENV_COMMIT_TAG)
        if tag:
            catalog[ButtonName.RELEASE.value] = OpenUrlAction(
                title="View Release",
                url=f"{self.context.get(ENV_REPO_URL)}/releases/tag/{tag}",
            )
        else:
            catalog[ButtonName.COMMIT.value] = OpenUrlAction(
                title="View Commit",
                url=self.context.get(ENV_PIPELINE_FORGE_URL),
            )

        return select_entries(catalog, self.settings.buttons)
