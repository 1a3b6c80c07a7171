"""Parses playbook source text into a `Document` tree.

The parser makes a single forward pass over the lines. It starts on the cover page, switches to
the table of contents at the "TABLE OF CONTENTS" line and to section parsing at the first section
header. Content lines are gathered into blocks, and each block is handed to `segment_block` when a
blank line, a separator or a heading closes it.
"""

from __future__ import annotations

import dataclasses as dc
import os
from typing import IO, List, Optional, Sequence, Tuple, Union

from playbook.documents.elements import (
    ContentItem,
    Document,
    Section,
    Subsection,
    TocSection,
    TocSubsection,
)
from playbook.file_utils.encoding import read_txt_file
from playbook.logger import logger, trace_logger
from playbook.nlp.patterns import (
    SECTION_HEADER_RE,
    SUBSECTION_HEADER_RE,
    TOC_ENTRY_RE,
    TOC_SUBENTRY_RE,
)
from playbook.partition.blocks import segment_block
from playbook.partition.common import exactly_one
from playbook.partition.text_type import (
    is_section_header,
    is_section_separator,
    is_section_start,
    is_subsection_header,
    is_table_of_contents_marker,
)


def partition_text(
    filename: Optional[str] = None,
    *,
    file: Optional[Union[bytes, IO[bytes]]] = None,
    text: Optional[str] = None,
    encoding: Optional[str] = None,
) -> Document:
    """Parses a playbook into its cover page, table of contents and section tree.

    Parameters
    ----------
    filename
        A string defining the target filename path.
    file
        A file-like object using "rb" mode --> open(filename, "rb"), or the raw bytes.
    text
        The playbook source as a string.
    encoding
        The encoding used to decode the input bytes when drawn from `filename` or `file`. Detected
        with chardet when not given.

    Raises `SourceUnavailableError` when `filename` or `file` cannot be read or decoded. Malformed
    content never raises; it degrades to simpler content items.
    """
    if text is not None and text.strip() == "" and not file and not filename:
        return Document()

    # -- Verify that only one of the arguments was provided --
    exactly_one(filename=filename, file=file, text=text)

    file_text = ""
    if filename is not None:
        encoding, file_text = read_txt_file(filename=filename, encoding=encoding)
    elif file is not None:
        encoding, file_text = read_txt_file(file=file, encoding=encoding)
    elif text is not None:
        file_text = str(text)

    lines = [line.rstrip("\r") for line in file_text.lstrip("\ufeff").split("\n")]
    document = _DocumentParser(lines).parse()

    subsection_count = sum(len(section.subsections) for section in document.sections)
    logger.info(
        f"Parsed playbook {filename or '<text>'}: {len(document.sections)} sections, "
        f"{subsection_count} subsections, encoding={encoding or 'str'}",
    )
    return document


def parse(path: Union[str, "os.PathLike[str]"], encoding: Optional[str] = None) -> Document:
    """Reads and parses the playbook at `path`."""
    return partition_text(filename=os.fspath(path), encoding=encoding)


# ================================================================================================
# DOCUMENT PARSER
# ================================================================================================


@dc.dataclass
class _OpenSubsection:
    number: str
    title: str
    content: List[ContentItem] = dc.field(default_factory=list)


@dc.dataclass
class _OpenSection:
    """A section still receiving content; frozen into a `Section` once parsing ends."""

    number: int
    title: str
    content: List[ContentItem] = dc.field(default_factory=list)
    subsections: List[_OpenSubsection] = dc.field(default_factory=list)

    def build(self) -> Section:
        return Section(
            number=self.number,
            title=self.title,
            content=tuple(self.content),
            subsections=tuple(
                Subsection(
                    number=sub.number,
                    title=sub.title,
                    content=tuple(sub.content),
                    parent_number=self.number,
                )
                for sub in self.subsections
            ),
        )


class _DocumentParser:
    """Single forward pass over the lines of one playbook.

    State lives on the instance for the duration of one `parse()` call; a new parser is created
    for every document.
    """

    def __init__(self, lines: Sequence[str]):
        self._lines = lines
        self._cover_page_lines: List[str] = []
        self._toc_lines: List[str] = []
        self._sections: List[_OpenSection] = []
        self._block: List[str] = []

    def parse(self) -> Document:
        lines = self._lines
        in_cover_page, in_toc = True, False

        i = 0
        while i < len(lines):
            raw_line = lines[i]
            text = raw_line.strip()
            next_text = lines[i + 1].strip() if i + 1 < len(lines) else None

            if (in_cover_page or in_toc) and is_table_of_contents_marker(text):
                in_cover_page, in_toc = False, True
                i += 1
                continue

            if in_cover_page:
                if not is_section_header(text, next_text):
                    self._cover_page_lines.append(raw_line)
                    i += 1
                    continue
                trace_logger.detail(  # type: ignore
                    f"Section header before any table of contents ends the cover page:\n\n{text}",
                )
                in_cover_page = False

            if in_toc:
                if not is_section_start(text):
                    if text and not is_section_separator(text):
                        self._toc_lines.append(raw_line)
                    i += 1
                    continue
                # -- reprocess this line as the first section header --
                in_toc = False

            if is_section_separator(text):
                self._flush_block()
                i += 1
                continue

            if is_section_header(text, next_text):
                self._flush_block()
                self._open_section(text)
                # -- skip the header and its separator --
                i += 2
                continue

            if self._current_section is not None and is_subsection_header(text):
                self._flush_block()
                self._open_subsection(text)
                i += 1
                continue

            if self._current_section is None:
                trace_logger.detail(f"Discarding line outside of any section:\n\n{text}")  # type: ignore # noqa: E501
                i += 1
                continue

            if text:
                self._block.append(raw_line)
            elif self._block:
                self._flush_block()
            i += 1

        self._flush_block()

        return Document(
            cover_page_lines=tuple(self._cover_page_lines),
            table_of_contents=_parse_table_of_contents(self._toc_lines),
            sections=tuple(section.build() for section in self._sections),
        )

    @property
    def _current_section(self) -> Optional[_OpenSection]:
        return self._sections[-1] if self._sections else None

    def _open_section(self, text: str) -> None:
        match = SECTION_HEADER_RE.match(text)
        assert match is not None
        number, title = int(match.group(1)), match.group(2).strip()

        previous = self._current_section
        if previous is not None and number <= previous.number:
            logger.warning(
                f"Section {number} ({title!r}) does not follow section {previous.number}; "
                "numbering is rebuilt when the document is normalized",
            )
        self._sections.append(_OpenSection(number=number, title=title))

    def _open_subsection(self, text: str) -> None:
        match = SUBSECTION_HEADER_RE.match(text)
        assert match is not None
        section = self._current_section
        assert section is not None

        major, minor, title = int(match.group(1)), match.group(2), match.group(3).strip()
        if major != section.number:
            logger.warning(
                f"Subsection {major}.{minor} ({title!r}) is filed under section {section.number}",
            )
        section.subsections.append(_OpenSubsection(number=minor, title=title))

    def _flush_block(self) -> None:
        """Segments the pending block into the open subsection, else the open section."""
        if not self._block:
            return
        block, self._block = self._block, []

        section = self._current_section
        if section is None:
            return

        items = segment_block(block)
        if section.subsections:
            section.subsections[-1].content.extend(items)
        else:
            section.content.extend(items)


def _parse_table_of_contents(lines: Sequence[str]) -> Tuple[TocSection, ...]:
    """Reads the entries of the literal table of contents.

    The result is informational only; the rendered table of contents is generated from the
    section tree.
    """
    entries: List[Tuple[int, str, Optional[int], List[TocSubsection]]] = []

    for line in lines:
        text = line.strip()
        if not text or is_section_separator(text):
            continue

        if subentry := TOC_SUBENTRY_RE.match(text):
            if entries:
                entries[-1][3].append(
                    TocSubsection(number=subentry.group(2), title=subentry.group(3))
                )
            continue

        if entry := TOC_ENTRY_RE.match(text):
            page_number = int(entry.group(3)) if entry.group(3) else None
            entries.append((int(entry.group(1)), entry.group(2).strip(), page_number, []))

    return tuple(
        TocSection(number=number, title=title, subsections=tuple(subs), page_number=page_number)
        for number, title, page_number, subs in entries
    )
