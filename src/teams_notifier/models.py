"""Adaptive Card data models for Teams notifications."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from teams_notifier.config import (
    ADAPTIVE_CARD_CONTENT_TYPE,
    ADAPTIVE_CARD_SCHEMA,
    ADAPTIVE_CARD_VERSION,
)


class FactName(str, Enum):
    PROJECT = "project"
    MESSAGE = "message"
    VERSION = "version"


class ButtonName(str, Enum):
    PIPELINE = "pipeline"
    COMMIT = "commit"
    RELEASE = "release"


class CardModel(BaseModel):
    """Base for card blocks: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TextBlock(CardModel):
    type: Literal["TextBlock"] = "TextBlock"
    text: str
    weight: str | None = None
    size: str | None = None
    color: str | None = None
    spacing: str | None = None
    is_subtle: bool | None = None
    wrap: bool | None = None
    font_type: str | None = None


class Image(CardModel):
    type: Literal["Image"] = "Image"
    url: str
    size: str | None = None
    style: str | None = None


class Fact(CardModel):
    title: str
    value: str


class FactSet(CardModel):
    type: Literal["FactSet"] = "FactSet"
    facts: list[Fact]


class Column(CardModel):
    type: Literal["Column"] = "Column"
    width: str
    items: list[CardElement] = Field(default_factory=list)


class ColumnSet(CardModel):
    type: Literal["ColumnSet"] = "ColumnSet"
    columns: list[Column]


class Container(CardModel):
    type: Literal["Container"] = "Container"
    items: list[CardElement]
    style: str | None = None
    bleed: bool | None = None
    spacing: str | None = None


class TableCell(CardModel):
    type: Literal["TableCell"] = "TableCell"
    items: list[CardElement]


class TableRow(CardModel):
    type: Literal["TableRow"] = "TableRow"
    cells: list[TableCell]
    style: str | None = None


class TableColumn(CardModel):
    width: int


class Table(CardModel):
    type: Literal["Table"] = "Table"
    columns: list[TableColumn]
    rows: list[TableRow]
    spacing: str | None = None
    show_grid_lines: bool | None = None
    first_row_as_headers: bool | None = None


CardElement = Annotated[
    Union[TextBlock, Image, ColumnSet, FactSet, Container, Table],
    Field(discriminator="type"),
]

Column.model_rebuild()
ColumnSet.model_rebuild()
Container.model_rebuild()
TableCell.model_rebuild()
TableRow.model_rebuild()
Table.model_rebuild()


class OpenUrlAction(CardModel):
    type: Literal["Action.OpenUrl"] = "Action.OpenUrl"
    title: str
    url: str


class AdaptiveCard(CardModel):
    schema_: str = Field(default=ADAPTIVE_CARD_SCHEMA, alias="$schema")
    type: Literal["AdaptiveCard"] = "AdaptiveCard"
    version: str = ADAPTIVE_CARD_VERSION
    body: list[CardElement]
    actions: list[OpenUrlAction] = Field(default_factory=list)


class Attachment(CardModel):
    content_type: str = ADAPTIVE_CARD_CONTENT_TYPE
    content_url: str | None = None
    content: AdaptiveCard


class Message(CardModel):
    """Top-level payload accepted by a Teams incoming webhook."""

    type: Literal["message"] = "message"
    attachments: list[Attachment]

    @property
    def card(self) -> AdaptiveCard:
        return self.attachments[0].content

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    @classmethod
    def from_json_bytes(cls, data: bytes | str) -> Message:
        return cls.model_validate_json(data)
