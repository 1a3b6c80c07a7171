"""Segments a block of playbook lines into typed content items.

A block is a run of lines between structural boundaries. `segment_block` walks it with a cursor,
classifies the line under the cursor with `classify_line` and hands the line to the matching
processor, which consumes as many lines as belong to its item. A processor that cannot build an
item returns None and the line falls through to the paragraph processor.
"""

from __future__ import annotations

import dataclasses as dc
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from playbook.cleaners.core import clean_list_marker, clean_text, escape_html
from playbook.documents.elements import (
    ContentItem,
    EmailTemplate,
    EmphasisTitle,
    Example,
    FullPageImage,
    H4Header,
    HookPoint,
    Image,
    KeyPointsBox,
    ListBlock,
    Paragraph,
    ProspectRow,
    ProspectTable,
)
from playbook.logger import logger, trace_logger
from playbook.nlp.patterns import (
    DASH_RULE_RE,
    EMAIL_FROM_RE,
    EMAIL_OPENER_RE,
    EMAIL_SUBJECT_RE,
    EMAIL_TO_RE,
    EMPHASIS_RE,
    FULLPAGE_IMAGE_RE,
    IMAGE_RE,
    NUMBERED_ITEM_RE,
    PROSPECT_FIELD_RE,
)
from playbook.partition.text_type import (
    LineKind,
    classify_line,
    is_all_caps_label,
    is_fullpage_image_directive,
    is_image_directive,
    is_list_item,
    is_nested_list_item,
    is_possible_numbered_list,
    is_prospect_entry_start,
    is_section_separator,
    is_special_block_opener,
    list_marker_indent,
)
from playbook.partition.utils.config import env_config
from playbook.partition.utils.constants import (
    EMAIL_BODY_SOFT_LIMIT,
    EMAIL_LEAD_IN,
    EXAMPLE_LEAD_IN,
    HOOK_POINT_LEAD_IN,
    KEY_POINTS_LEAD_IN,
)

# -- (item or None when the span produces nothing, index of the first unconsumed line) --
_Match = Tuple[Optional[ContentItem], int]


@dc.dataclass(frozen=True)
class _Lines:
    """The lines of a block, stripped for classification and raw for indentation checks."""

    texts: Tuple[str, ...]
    raw: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.texts)


def segment_block(lines: Sequence[str]) -> List[ContentItem]:
    """Partitions a block of source lines into an ordered list of content items.

    Blank lines are allowed; they separate paragraphs and end lists and hook points. Text of the
    returned items is HTML-escaped with symbol icons substituted.
    """
    raw = tuple(line.rstrip("\r\n") for line in lines)
    block = _Lines(texts=tuple(line.strip() for line in raw), raw=raw)

    items: List[ContentItem] = []
    i = 0
    while i < len(block):
        if not block.texts[i]:
            i += 1
            continue

        kind = classify_line(block.texts, i)
        match = _PROCESSORS[kind](block, i)
        if match is None:
            match = _process_paragraph(block, i)

        item, next_index = match
        if item is not None:
            items.append(item)
        i = max(next_index, i + 1)

    return items


# ================================================================================================
# PROCESSORS
# ================================================================================================


def _process_separator(block: _Lines, start: int) -> Optional[_Match]:
    return None, start + 1


def _process_fullpage_image(block: _Lines, start: int) -> Optional[_Match]:
    match = FULLPAGE_IMAGE_RE.match(block.texts[start])
    if match is None:
        return None
    return FullPageImage(path=escape_html(match.group(1).strip())), start + 1


def _process_image(block: _Lines, start: int) -> Optional[_Match]:
    match = IMAGE_RE.match(block.texts[start])
    if match is None:
        return None
    return Image(path=escape_html(match.group(1).strip())), start + 1


def _process_h4_header(block: _Lines, start: int) -> Optional[_Match]:
    text = block.texts[start].replace(":", "", 1).strip()
    return H4Header(text=clean_text(text)), start + 1


def _collect_box_lines(
    block: _Lines,
    start: int,
    lead_in: int,
    max_lines: int,
    box_name: str,
) -> Tuple[List[str], int]:
    """Collects the raw interior lines of a box opened at `start`.

    Collection stops at an ALL-CAPS label past the lead-in lines, at a separator, at a blank line
    once content exists, or when `max_lines` lines have been collected.
    """
    interior: List[str] = []
    i = start + 1
    while i < len(block):
        text = block.texts[i]
        if is_all_caps_label(text) and i > start + lead_in:
            break
        if is_section_separator(text):
            break
        if not text:
            if interior:
                break
            i += 1
            continue
        if len(interior) >= max_lines:
            logger.warning(
                f"{box_name} starting at {block.texts[start]!r} exceeds {max_lines} lines, "
                "the remaining lines are segmented separately",
            )
            break
        interior.append(block.raw[i])
        i += 1
    return interior, i


def _process_key_points(block: _Lines, start: int) -> Optional[_Match]:
    interior, end = _collect_box_lines(
        block,
        start,
        lead_in=KEY_POINTS_LEAD_IN,
        max_lines=env_config.KEY_POINTS_MAX_LINES,
        box_name="Key points box",
    )
    box = KeyPointsBox(
        header=clean_text(block.texts[start]),
        content=tuple(segment_block(interior)),
    )
    return box, end


def _process_example(block: _Lines, start: int) -> Optional[_Match]:
    interior, end = _collect_box_lines(
        block,
        start,
        lead_in=EXAMPLE_LEAD_IN,
        max_lines=env_config.EXAMPLE_MAX_LINES,
        box_name="Example box",
    )
    box = Example(
        header=clean_text(block.texts[start]),
        content=tuple(segment_block(interior)),
    )
    return box, end


def _process_email(block: _Lines, start: int) -> Optional[_Match]:
    max_lines = env_config.EMAIL_MAX_LINES
    fields: Dict[str, str] = {"subject": "", "sender": "", "recipient": ""}

    # -- header fields, up to a blank line, a dash rule or the first line of the body --
    i = start
    while i < len(block):
        text = block.texts[i]
        if subject := EMAIL_SUBJECT_RE.match(text):
            fields["subject"] = clean_text(subject.group(1).strip())
        elif sender := EMAIL_FROM_RE.match(text):
            fields["sender"] = clean_text(sender.group(1).strip())
        elif recipient := EMAIL_TO_RE.match(text):
            fields["recipient"] = clean_text(recipient.group(1).strip())
        elif not text or DASH_RULE_RE.match(text):
            i += 1
            break
        elif not EMAIL_OPENER_RE.match(text):
            break
        i += 1

    body: List[str] = []
    while i < len(block) and i - start < max_lines:
        text = block.texts[i]
        if is_all_caps_label(text) and i > start + EMAIL_LEAD_IN:
            break
        if is_section_separator(text):
            break
        if not text and len(body) > EMAIL_BODY_SOFT_LIMIT:
            break
        body.append(clean_text(text))
        i += 1

    while body and not body[-1]:
        body.pop()

    return EmailTemplate(body_lines=tuple(body), **fields), i


def _process_hook_point(block: _Lines, start: int) -> Optional[_Match]:
    max_lines = env_config.HOOK_POINT_MAX_LINES
    opener = block.texts[start]
    _, _, remainder = opener.partition(":")
    content = [remainder.strip()] if remainder.strip() else []

    i = start + 1
    while i < len(block) and len(content) < max_lines:
        text = block.texts[i]
        if is_all_caps_label(text) and i > start + HOOK_POINT_LEAD_IN:
            break
        if is_section_separator(text):
            break
        if text:
            content.append(text)
        elif content:
            break
        i += 1

    if not content:
        trace_logger.detail(f"Not a hook point. Opener has no content:\n\n{opener}")  # type: ignore
        return None
    return HookPoint(text=clean_text(" ".join(content))), i


def _process_emphasis(block: _Lines, start: int) -> Optional[_Match]:
    match = EMPHASIS_RE.match(block.texts[start])
    if match is None:
        return None
    return EmphasisTitle(text=clean_text(match.group(1).strip())), start + 1


def _is_category_header(text: str) -> bool:
    """ALL-CAPS grouping label without a colon, e.g. "VINEYARD/WINERY"."""
    return is_all_caps_label(text) and not text.endswith(":")


def _next_record_follows(block: _Lines, index: int) -> bool:
    """Checks if the category headers starting at `index` are followed by a numbered record."""
    i = index
    while i < len(block) and _is_category_header(block.texts[i]):
        i += 1
    return i < len(block) and is_possible_numbered_list(block.texts[i])


def _process_prospect_table(block: _Lines, start: int) -> Optional[_Match]:
    max_lines = env_config.PROSPECT_MAX_LINES
    rows: List[ProspectRow] = []

    i = start
    while i < len(block):
        text = block.texts[i]
        record = NUMBERED_ITEM_RE.match(text)
        if record is None:
            if _is_category_header(text) and _next_record_follows(block, i):
                trace_logger.detail(f"Skipping prospect category header:\n\n{text}")  # type: ignore
                i += 1
                continue
            break

        fields: Dict[str, str] = {}
        i += 1
        record_start = i
        while i < len(block):
            field_text = block.texts[i]
            if not field_text:
                i += 1
                break
            field = PROSPECT_FIELD_RE.match(field_text)
            if field is None:
                break
            fields[field.group(1).lower()] = clean_text(field.group(2).strip())
            i += 1
            if i - record_start >= max_lines:
                logger.warning(
                    f"Prospect record {text!r} exceeds {max_lines} lines, ending it early",
                )
                break

        rows.append(
            ProspectRow(number=record.group(1), name=clean_text(record.group(2).strip()), **fields)
        )

    if not rows:
        return None
    return ProspectTable(rows=tuple(rows)), i


def _ends_list(block: _Lines, index: int) -> bool:
    text = block.texts[index]
    return (
        is_section_separator(text)
        or is_all_caps_label(text)
        or is_image_directive(text)
        or is_fullpage_image_directive(text)
        or is_special_block_opener(text)
        or is_prospect_entry_start(block.texts, index)
    )


def _process_list(block: _Lines, start: int) -> Optional[_Match]:
    ordered = is_possible_numbered_list(block.texts[start])
    base_indent = list_marker_indent(block.raw[start])
    items: List[str] = []
    current: List[str] = []

    def flush() -> None:
        if current:
            items.append(clean_text(" ".join(current)))
            current.clear()

    i = start
    while i < len(block):
        text = block.texts[i]
        if i > start:
            if is_nested_list_item(block.raw[i], base_indent):
                trace_logger.detail(f"Nested list item ends the list:\n\n{text}")  # type: ignore
                break
            if is_list_item(text) and list_marker_indent(block.raw[i]) < base_indent:
                trace_logger.detail(f"Outer list item ends the list:\n\n{text}")  # type: ignore
                break
            if not text:
                if items or current:
                    break
                i += 1
                continue
            if _ends_list(block, i):
                break

        if is_list_item(text):
            flush()
            current.append(clean_list_marker(text))
        else:
            current.append(text)
        i += 1

    flush()
    if not items:
        return None
    return ListBlock(ordered=ordered, items=tuple(items)), i


def _is_paragraph_boundary(block: _Lines, index: int) -> bool:
    text = block.texts[index]
    return (
        is_list_item(text)
        or is_all_caps_label(text)
        or is_section_separator(text)
        or is_image_directive(text)
        or is_fullpage_image_directive(text)
        or is_special_block_opener(text)
    )


def _process_paragraph(block: _Lines, start: int) -> _Match:
    parts: List[str] = []
    i = start
    while i < len(block):
        text = block.texts[i]
        if not text:
            if parts:
                break
            i += 1
            continue
        if parts and _is_paragraph_boundary(block, i):
            break
        parts.append(text)
        i += 1

    if not parts:
        return None, i
    return Paragraph(text=clean_text(" ".join(parts))), i


_PROCESSORS: Dict[LineKind, Callable[[_Lines, int], Optional[_Match]]] = {
    LineKind.SEPARATOR: _process_separator,
    LineKind.FULL_PAGE_IMAGE: _process_fullpage_image,
    LineKind.IMAGE: _process_image,
    LineKind.H4_HEADER: _process_h4_header,
    LineKind.KEY_POINTS: _process_key_points,
    LineKind.EMAIL: _process_email,
    LineKind.HOOK_POINT: _process_hook_point,
    LineKind.EXAMPLE: _process_example,
    LineKind.EMPHASIS: _process_emphasis,
    LineKind.PROSPECT: _process_prospect_table,
    LineKind.LIST_ITEM: _process_list,
    LineKind.PARAGRAPH: _process_paragraph,
}
