"""Provides functions for classifying lines of playbook source text.

Every predicate looks at a single stripped line, or a line plus a short lookahead window, and never
raises. `classify_line` applies them in the fixed priority order used by the block segmenter.
"""

from __future__ import annotations

import enum
from typing import Optional, Sequence

from playbook.logger import trace_logger
from playbook.nlp.patterns import (
    BULLETED_ITEM_RE,
    CAPS_LABEL_EXCLUDED_PREFIXES,
    CAPS_LABEL_MIN_LENGTH,
    CAPS_LABEL_RE,
    CAPS_LABEL_WITH_COLON_RE,
    EMAIL_OPENER_RE,
    EMPHASIS_RE,
    EXAMPLE_OPENER_RE,
    FULLPAGE_IMAGE_RE,
    HOOK_POINT_OPENER_RE,
    IMAGE_RE,
    KEY_POINTS_OPENER_RE,
    LIST_MARKER_RE,
    NESTED_LIST_MARKER_RE,
    NUMBERED_ITEM_RE,
    PAGE_REFERENCE_RE,
    PROSPECT_FIELD_RE,
    SECTION_HEADER_RE,
    SECTION_SEPARATOR_RE,
    SECTION_START_RE,
    SUBSECTION_HEADER_RE,
    TABLE_OF_CONTENTS_MARKER,
)
from playbook.partition.utils.config import env_config


class LineKind(enum.Enum):
    """Block-level line kinds, in the priority order they are tried."""

    SEPARATOR = "separator"
    FULL_PAGE_IMAGE = "fullPageImage"
    IMAGE = "image"
    H4_HEADER = "h4Header"
    KEY_POINTS = "keyPoints"
    EMAIL = "email"
    HOOK_POINT = "hookPoint"
    EXAMPLE = "example"
    EMPHASIS = "emphasis"
    PROSPECT = "prospect"
    LIST_ITEM = "listItem"
    PARAGRAPH = "paragraph"


# ================================================================================================
# DOCUMENT STRUCTURE
# ================================================================================================


def is_section_separator(text: str) -> bool:
    """Checks if the line is a section separator made only of "=" characters."""
    return SECTION_SEPARATOR_RE.match(text.strip()) is not None


def is_section_header(text: str, next_text: Optional[str]) -> bool:
    """Checks if the line opens a section, i.e. "<int>. <TITLE>" directly followed by a separator.

    Example
    -------
    is_section_header("3. CROP FOCUS", "==========") -> True
    is_section_header("3. CROP FOCUS ........ Page 5", "4. GEOGRAPHY ...") -> False
    """
    if SECTION_HEADER_RE.match(text.strip()) is None:
        return False
    return next_text is not None and is_section_separator(next_text)


def has_page_reference(text: str) -> bool:
    """Checks if the line ends with a table-of-contents page reference, e.g. "..... Page 4"."""
    return PAGE_REFERENCE_RE.search(text.strip()) is not None


def is_section_start(text: str) -> bool:
    """Checks if a line met inside the table of contents is really the first section header.

    Table-of-contents entries carry a page reference, the first real header does not.
    """
    text = text.strip()
    if SECTION_START_RE.match(text) is None:
        return False
    if TABLE_OF_CONTENTS_MARKER in text:
        return False
    return not has_page_reference(text)


def is_table_of_contents_marker(text: str) -> bool:
    return TABLE_OF_CONTENTS_MARKER in text


def is_subsection_header(text: str) -> bool:
    """Checks if the line is a "<int>.<int> <title>" subsection header."""
    return SUBSECTION_HEADER_RE.match(text.strip()) is not None


# ================================================================================================
# CONTENT LINES
# ================================================================================================


def is_fullpage_image_directive(text: str) -> bool:
    return FULLPAGE_IMAGE_RE.match(text.strip()) is not None


def is_image_directive(text: str) -> bool:
    return IMAGE_RE.match(text.strip()) is not None


def is_all_caps_label(text: str) -> bool:
    """Checks if the whole line is an uppercase label such as "KEY OBJECTIVES:" or
    "VINEYARD/WINERY".

    Only letters, spaces and "& / ( ) -" are allowed, with an optional trailing colon. Labels must
    be longer than five characters and running totals ("TOTAL ...") are not labels.
    """
    text = text.strip()
    if len(text) < CAPS_LABEL_MIN_LENGTH:
        return False

    if any(text.startswith(prefix) for prefix in CAPS_LABEL_EXCLUDED_PREFIXES):
        trace_logger.detail(f"Not a label. Line is a running total:\n\n{text}")  # type: ignore
        return False

    return CAPS_LABEL_WITH_COLON_RE.match(text) is not None or CAPS_LABEL_RE.match(text) is not None


def is_key_points_opener(text: str) -> bool:
    return KEY_POINTS_OPENER_RE.match(text.strip()) is not None


def is_email_opener(text: str) -> bool:
    return EMAIL_OPENER_RE.match(text.strip()) is not None


def is_hook_point_opener(text: str) -> bool:
    return HOOK_POINT_OPENER_RE.match(text.strip()) is not None


def is_example_opener(text: str) -> bool:
    return EXAMPLE_OPENER_RE.match(text.strip()) is not None


def is_emphasis_line(text: str) -> bool:
    """Checks if the line is a one-line emphasis title, e.g. "IMPORTANT: Test soil first"."""
    return EMPHASIS_RE.match(text.strip()) is not None


def is_special_block_opener(text: str) -> bool:
    """Checks if the line opens a key-points, email, hook point, example or emphasis block."""
    return (
        is_key_points_opener(text)
        or is_email_opener(text)
        or is_hook_point_opener(text)
        or is_example_opener(text)
        or is_emphasis_line(text)
    )


def is_bulleted_text(text: str) -> bool:
    """Checks to see if the line is a bulleted list item ("•", "-" or "*")."""
    return BULLETED_ITEM_RE.match(text.strip()) is not None


def is_possible_numbered_list(text: str) -> bool:
    """Checks to see if the line is a potential numbered list item, e.g. "2. Water daily"."""
    return NUMBERED_ITEM_RE.match(text.strip()) is not None


def is_list_item(text: str) -> bool:
    return LIST_MARKER_RE.match(text.strip()) is not None


def list_marker_indent(raw_text: str) -> int:
    """Returns the indentation of a list marker line, 0 when the line is not indented."""
    match = NESTED_LIST_MARKER_RE.match(raw_text)
    return len(match.group(1).expandtabs(4)) if match else 0


def is_nested_list_item(raw_text: str, base_indent: int = 0) -> bool:
    """Checks if an unstripped line is a list marker indented deeper than `base_indent`."""
    return NESTED_LIST_MARKER_RE.match(raw_text) is not None and (
        list_marker_indent(raw_text) > base_indent
    )


def is_prospect_field(text: str) -> bool:
    """Checks if the line is one of the "Address:", "Phone:", "Email:" or "Website:" fields."""
    return PROSPECT_FIELD_RE.match(text.strip()) is not None


def is_prospect_entry_start(
    lines: Sequence[str],
    index: int,
    lookahead: Optional[int] = None,
) -> bool:
    """Checks if `lines[index]` starts a prospect record rather than a numbered list item.

    The line must be "<int>. <name>" and one of the next `lookahead` lines must be a prospect
    field, with no other numbered line in between.
    """
    if index >= len(lines) or not is_possible_numbered_list(lines[index]):
        return False

    lookahead = env_config.PROSPECT_LOOKAHEAD if lookahead is None else lookahead
    for next_text in lines[index + 1 : index + 1 + lookahead]:
        if is_prospect_field(next_text):
            return True
        if is_possible_numbered_list(next_text):
            break
    return False


def classify_line(lines: Sequence[str], index: int) -> LineKind:
    """Classifies `lines[index]` by trying each line kind in priority order; first match wins."""
    text = lines[index].strip()

    if is_section_separator(text):
        return LineKind.SEPARATOR
    if is_fullpage_image_directive(text):
        return LineKind.FULL_PAGE_IMAGE
    if is_image_directive(text):
        return LineKind.IMAGE
    if is_all_caps_label(text):
        trace_logger.detail(f"Label. Line is all caps:\n\n{text}")  # type: ignore
        return LineKind.H4_HEADER
    if is_key_points_opener(text):
        return LineKind.KEY_POINTS
    if is_email_opener(text):
        return LineKind.EMAIL
    if is_hook_point_opener(text):
        return LineKind.HOOK_POINT
    if is_example_opener(text):
        return LineKind.EXAMPLE
    if is_emphasis_line(text):
        return LineKind.EMPHASIS
    if is_prospect_entry_start(lines, index):
        trace_logger.detail(f"Prospect. Numbered line is followed by a field:\n\n{text}")  # type: ignore # noqa: E501
        return LineKind.PROSPECT
    if is_list_item(text):
        return LineKind.LIST_ITEM
    return LineKind.PARAGRAPH
