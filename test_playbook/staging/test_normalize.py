import pytest

from playbook.documents.elements import (
    Document,
    Paragraph,
    Section,
    Subsection,
    TocSection,
    TocSubsection,
)
from playbook.staging.normalize import generate_toc, normalize_document


def _section(number: int, title: str, *subsection_titles: str) -> Section:
    return Section(
        number=number,
        title=title,
        content=(Paragraph(text=f"{title} text"),),
        subsections=tuple(
            Subsection(number=str(idx), title=sub_title, parent_number=number)
            for idx, sub_title in enumerate(subsection_titles, start=1)
        ),
    )


@pytest.fixture()
def document() -> Document:
    return Document(
        sections=(
            _section(1, "Purpose of the Document"),
            _section(2, "Marketing/Sales Pipeline Overview", "Lead Flow"),
            _section(3, "Crop Focus", "Orchards", "Vineyards"),
        ),
    )


def test_normalize_drops_the_excluded_section_and_renumbers(document):
    sections = normalize_document(document).sections

    assert [(s.number, s.title) for s in sections] == [
        (1, "Purpose of the Document"),
        (2, "Crop Focus"),
    ]


def test_normalize_rebuilds_subsection_identifiers_from_the_new_parent_number(document):
    crop_focus = normalize_document(document).sections[1]

    assert [sub.identifier for sub in crop_focus.subsections] == ["2.1", "2.2"]
    assert [sub.anchor for sub in crop_focus.subsections] == ["section2-1", "section2-2"]
    assert crop_focus.anchor == "section2"


def test_normalize_keeps_content_and_literal_toc():
    toc = (TocSection(number=1, title="Purpose", page_number=3),)
    document = Document(
        cover_page_lines=("Cover",),
        table_of_contents=toc,
        sections=(_section(4, "Purpose"),),
    )

    normalized = normalize_document(document)

    assert normalized.cover_page_lines == ("Cover",)
    assert normalized.table_of_contents == toc
    assert normalized.sections[0].content == (Paragraph(text="Purpose text"),)
    assert normalized.sections[0].number == 1


def test_normalize_is_idempotent(document):
    once = normalize_document(document)
    assert normalize_document(once) == once


def test_normalize_numbers_are_contiguous_from_one():
    document = Document(sections=tuple(_section(n, f"Section {n}") for n in (3, 7, 7, 12)))

    numbers = [s.number for s in normalize_document(document).sections]

    assert numbers == [1, 2, 3, 4]


def test_normalize_exclusion_matches_case_insensitively():
    document = Document(sections=(_section(1, "MARKETING/SALES PIPELINE OVERVIEW"),))
    assert normalize_document(document).sections == ()


def test_normalize_exclusion_pattern_can_be_overridden(document):
    sections = normalize_document(document, excluded_section_pattern="^crop").sections
    assert [s.title for s in sections] == [
        "Purpose of the Document",
        "Marketing/Sales Pipeline Overview",
    ]


def test_normalize_exclusion_can_be_disabled_from_the_environment(document, monkeypatch):
    monkeypatch.setenv("PLAYBOOK_EXCLUDED_SECTION_PATTERN", "")
    assert len(normalize_document(document).sections) == 3


def test_normalize_rejects_an_invalid_exclusion_pattern(document):
    with pytest.raises(ValueError, match="Invalid excluded section pattern"):
        normalize_document(document, excluded_section_pattern="(unclosed")


def test_generate_toc_assigns_page_numbers_after_cover_and_toc():
    sections = normalize_document(
        Document(sections=(_section(1, "A"), _section(2, "B", "B one"), _section(3, "C"))),
    ).sections

    toc = generate_toc(sections)

    assert [entry.page_number for entry in toc] == [3, 4, 5]
    assert toc[1] == TocSection(
        number=2,
        title="B",
        subsections=(TocSubsection(number="1", title="B one"),),
        page_number=4,
    )


def test_generate_toc_of_no_sections_is_empty():
    assert generate_toc(()) == ()
