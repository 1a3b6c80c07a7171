from __future__ import annotations

import dataclasses as dc
from typing import Optional, Sequence, Tuple

from playbook.documents.elements import Document, Section, TocSection, TocSubsection
from playbook.logger import trace_logger
from playbook.partition.utils.config import env_config
from playbook.partition.utils.constants import FIRST_SECTION_PAGE_NUMBER


def normalize_document(
    document: Document,
    excluded_section_pattern: Optional[str] = None,
) -> Document:
    """Drops excluded sections and renumbers the remaining ones 1..N in source order.

    Sections whose title matches `excluded_section_pattern` (case-insensitive regex, taken from
    PLAYBOOK_EXCLUDED_SECTION_PATTERN when None, disabled when empty) are removed. Subsections keep
    their own numbers and follow their parent's new number. Normalizing a normalized document
    returns an equal document.

    Raises ValueError when the exclusion pattern is not a valid regular expression.
    """
    excluded_re = env_config.excluded_section_re(excluded_section_pattern)

    kept = []
    for section in document.sections:
        if excluded_re is not None and excluded_re.search(section.title):
            trace_logger.detail(f"Dropping excluded section {section.number}. {section.title}")  # type: ignore # noqa: E501
            continue
        kept.append(section)

    return dc.replace(
        document,
        sections=tuple(_renumber(section, number) for number, section in enumerate(kept, start=1)),
    )


def _renumber(section: Section, number: int) -> Section:
    return dc.replace(
        section,
        number=number,
        subsections=tuple(dc.replace(sub, parent_number=number) for sub in section.subsections),
    )


def generate_toc(sections: Sequence[Section]) -> Tuple[TocSection, ...]:
    """Builds the table of contents of already normalized sections.

    Page 1 is the cover and page 2 the table of contents, so the section at index `i` is on page
    `3 + i`.
    """
    return tuple(
        TocSection(
            number=section.number,
            title=section.title,
            subsections=tuple(
                TocSubsection(number=sub.number, title=sub.title) for sub in section.subsections
            ),
            page_number=FIRST_SECTION_PAGE_NUMBER + idx,
        )
        for idx, section in enumerate(sections)
    )
