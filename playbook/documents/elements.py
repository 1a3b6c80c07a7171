from __future__ import annotations

import abc
import dataclasses as dc
from typing import Any, Optional, Tuple

from typing_extensions import TypeAlias


class ContentType:
    PARAGRAPH = "paragraph"
    LIST = "list"
    H4_HEADER = "h4Header"
    KEY_POINTS_BOX = "keyPointsBox"
    EMAIL_TEMPLATE = "emailTemplate"
    HOOK_POINT = "hookPoint"
    EXAMPLE = "example"
    EMPHASIS_TITLE = "emphasisTitle"
    PROSPECT_TABLE = "prospectTable"
    IMAGE = "image"
    FULL_PAGE_IMAGE = "fullPageImage"

    @classmethod
    def to_dict(cls):
        """
        Convert class attributes to a dictionary.

        Returns:
            dict: A dictionary where keys are attribute names and values are attribute values.
        """
        return {
            attr: getattr(cls, attr)
            for attr in dir(cls)
            if not callable(getattr(cls, attr)) and not attr.startswith("__")
        }


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, ContentItem):
        return value.to_dict()
    if dc.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dc.fields(value)}
    if isinstance(value, (tuple, list)):
        return [_to_jsonable(v) for v in value]
    return value


class ContentItem(abc.ABC):
    """One classified unit of section content.

    The set of subclasses is closed: the renderer knows each of them and renders anything else as
    an empty string. Text fields hold HTML-escaped text with symbol icons already substituted.
    """

    category = "Uncategorized"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.category}
        for field in dc.fields(self):  # type: ignore[arg-type]
            out[field.name] = _to_jsonable(getattr(self, field.name))
        return out


ContentItems: TypeAlias = "Tuple[ContentItem, ...]"


@dc.dataclass(frozen=True)
class Paragraph(ContentItem):
    text: str

    category = ContentType.PARAGRAPH


@dc.dataclass(frozen=True)
class ListBlock(ContentItem):
    """A bulleted or numbered list; `ordered` is fixed by the marker of the first line."""

    ordered: bool
    items: Tuple[str, ...]

    category = ContentType.LIST


@dc.dataclass(frozen=True)
class H4Header(ContentItem):
    text: str

    category = ContentType.H4_HEADER


@dc.dataclass(frozen=True)
class KeyPointsBox(ContentItem):
    header: str
    content: ContentItems = ()

    category = ContentType.KEY_POINTS_BOX


@dc.dataclass(frozen=True)
class EmailTemplate(ContentItem):
    subject: str = ""
    sender: str = ""
    recipient: str = ""
    body_lines: Tuple[str, ...] = ()

    category = ContentType.EMAIL_TEMPLATE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.category,
            "subject": self.subject,
            "from": self.sender,
            "to": self.recipient,
            "body_lines": list(self.body_lines),
        }


@dc.dataclass(frozen=True)
class HookPoint(ContentItem):
    text: str

    category = ContentType.HOOK_POINT


@dc.dataclass(frozen=True)
class Example(ContentItem):
    header: str
    content: ContentItems = ()

    category = ContentType.EXAMPLE


@dc.dataclass(frozen=True)
class EmphasisTitle(ContentItem):
    text: str

    category = ContentType.EMPHASIS_TITLE


@dc.dataclass(frozen=True)
class ProspectRow:
    """One prospect record; only `number` and `name` are always present."""

    number: str
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""


@dc.dataclass(frozen=True)
class ProspectTable(ContentItem):
    rows: Tuple[ProspectRow, ...]

    category = ContentType.PROSPECT_TABLE


@dc.dataclass(frozen=True)
class Image(ContentItem):
    path: str

    category = ContentType.IMAGE


@dc.dataclass(frozen=True)
class FullPageImage(ContentItem):
    path: str

    category = ContentType.FULL_PAGE_IMAGE


# ================================================================================================
# DOCUMENT TREE
# ================================================================================================


@dc.dataclass(frozen=True)
class Subsection:
    """A `N.M Title` subsection, numbered within its parent section.

    `number` is the minor part ("1", "2", ...) and is never renumbered; `parent_number` follows
    the parent section, so `identifier` and `anchor` change when the parent is renumbered.
    """

    number: str
    title: str
    content: ContentItems = ()
    parent_number: int = 0

    @property
    def identifier(self) -> str:
        return f"{self.parent_number}.{self.number}"

    @property
    def anchor(self) -> str:
        return f"section{self.parent_number}-{self.number}"


@dc.dataclass(frozen=True)
class Section:
    number: int
    title: str
    subsections: Tuple[Subsection, ...] = ()
    content: ContentItems = ()

    @property
    def anchor(self) -> str:
        return f"section{self.number}"


@dc.dataclass(frozen=True)
class TocSubsection:
    number: str
    title: str


@dc.dataclass(frozen=True)
class TocSection:
    number: int
    title: str
    subsections: Tuple[TocSubsection, ...] = ()
    page_number: Optional[int] = None

    @property
    def anchor(self) -> str:
        return f"section{self.number}"


@dc.dataclass(frozen=True)
class Document:
    """Root of one parse.

    `table_of_contents` holds the entries read from the document's own TOC text. It is kept for
    reference only; rendering regenerates the TOC from `sections`.
    """

    cover_page_lines: Tuple[str, ...] = ()
    table_of_contents: Tuple[TocSection, ...] = ()
    sections: Tuple[Section, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Plain dicts and lists for the whole tree; content items carry their "type"."""
        return _to_jsonable(self)
