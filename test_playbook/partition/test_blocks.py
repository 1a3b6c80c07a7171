import logging

import pytest

from playbook.documents.elements import (
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
from playbook.partition.blocks import segment_block
from test_playbook.unit_utils import segment

# ------------------------------------------------------------------------------------------------
# LISTS
# ------------------------------------------------------------------------------------------------


def test_numbered_lines_become_an_ordered_list():
    assert segment("1. First\n2. Second") == [ListBlock(ordered=True, items=("First", "Second"))]


@pytest.mark.parametrize("bullet", ["•", "-", "*"])
def test_bulleted_lines_become_an_unordered_list(bullet):
    assert segment(f"{bullet} First\n{bullet} Second") == [
        ListBlock(ordered=False, items=("First", "Second")),
    ]


def test_list_type_is_fixed_by_the_first_marker():
    assert segment("• First\n2. Second") == [ListBlock(ordered=False, items=("First", "Second"))]


def test_list_continuation_lines_are_joined_to_the_current_item():
    assert segment("• Build relationships\nwith orchards\n• Grow repeat orders") == [
        ListBlock(ordered=False, items=("Build relationships with orchards", "Grow repeat orders")),
    ]


def test_nested_run_is_its_own_list_and_the_outer_list_resumes_after_it():
    assert segment("• Orchards\n    • Apples\n    • Pears\n• Vineyards") == [
        ListBlock(ordered=False, items=("Orchards",)),
        ListBlock(ordered=False, items=("Apples", "Pears")),
        ListBlock(ordered=False, items=("Vineyards",)),
    ]


def test_blank_line_ends_the_list():
    assert segment("• First\n\nAfter the list.") == [
        ListBlock(ordered=False, items=("First",)),
        Paragraph(text="After the list."),
    ]


def test_label_ends_the_list():
    assert segment("• First\nLEAD SOURCES:\n• Second") == [
        ListBlock(ordered=False, items=("First",)),
        H4Header(text="LEAD SOURCES"),
        ListBlock(ordered=False, items=("Second",)),
    ]


# ------------------------------------------------------------------------------------------------
# PARAGRAPHS AND LABELS
# ------------------------------------------------------------------------------------------------


def test_paragraph_lines_are_joined_with_spaces():
    assert segment("Soil health drives yield.\nWe measure it every season.") == [
        Paragraph(text="Soil health drives yield. We measure it every season."),
    ]


def test_paragraph_stops_at_a_list_marker():
    assert segment("Our goals:\n• Grow") == [
        Paragraph(text="Our goals:"),
        ListBlock(ordered=False, items=("Grow",)),
    ]


def test_all_caps_label_becomes_h4_without_trailing_colon():
    assert segment("KEY OBJECTIVES:") == [H4Header(text="KEY OBJECTIVES")]


def test_label_that_looks_like_a_special_block_resolves_to_h4_without_its_first_colon():
    assert segment("NOTE: SEE BELOW:\nCall before visiting.") == [
        H4Header(text="NOTE SEE BELOW:"),
        Paragraph(text="Call before visiting."),
    ]


def test_separator_lines_produce_no_items():
    assert segment("First.\n=====\nSecond.") == [
        Paragraph(text="First."),
        Paragraph(text="Second."),
    ]


def test_empty_block_has_no_items():
    assert segment_block([]) == []
    assert segment_block(["", "   "]) == []


# ------------------------------------------------------------------------------------------------
# ESCAPING AND ICONS
# ------------------------------------------------------------------------------------------------


def test_text_is_escaped_when_it_enters_an_item():
    assert segment("Tom & Jerry's <b>\"farm\"</b>") == [
        Paragraph(text="Tom &amp; Jerry&#x27;s &lt;b&gt;&quot;farm&quot;&lt;/b&gt;"),
    ]


def test_mapped_symbols_become_icon_markup_that_is_not_escaped():
    (paragraph,) = segment("Apples \U0001F34E & pears")
    assert isinstance(paragraph, Paragraph)
    assert paragraph.text == (
        'Apples <i class="fas fa-apple-alt" style="color: #e74c3c;"></i> &amp; pears'
    )


# ------------------------------------------------------------------------------------------------
# BOXES
# ------------------------------------------------------------------------------------------------


def test_key_points_box_segments_its_interior():
    assert segment("KEY POINTS to remember\n• Test soil\n• Follow up in a week") == [
        KeyPointsBox(
            header="KEY POINTS to remember",
            content=(ListBlock(ordered=False, items=("Test soil", "Follow up in a week")),),
        ),
    ]


def test_key_points_opener_is_a_plain_prefix():
    assert segment("Keystone growers buy in spring.\n• Call in March") == [
        KeyPointsBox(
            header="Keystone growers buy in spring.",
            content=(ListBlock(ordered=False, items=("Call in March",)),),
        ),
    ]


def test_key_points_box_allows_a_label_right_after_the_opener():
    (box,) = segment("Data to capture\nGROWER DETAILS:\n• Acreage")
    assert box == KeyPointsBox(
        header="Data to capture",
        content=(H4Header(text="GROWER DETAILS"), ListBlock(ordered=False, items=("Acreage",))),
    )


def test_key_points_box_stops_at_a_later_label():
    items = segment("Note: before the call\nCheck the CRM.\nLEAD SOURCES:\n• Fairs")
    assert items == [
        KeyPointsBox(header="Note: before the call", content=(Paragraph(text="Check the CRM."),)),
        H4Header(text="LEAD SOURCES"),
        ListBlock(ordered=False, items=("Fairs",)),
    ]


def test_key_points_box_is_capped(monkeypatch, caplog):
    monkeypatch.setenv("PLAYBOOK_KEY_POINTS_MAX_LINES", "2")
    items = segment("Key facts\n• One\n• Two\n• Three")
    assert items[0] == KeyPointsBox(
        header="Key facts",
        content=(ListBlock(ordered=False, items=("One", "Two")),),
    )
    assert items[1] == ListBlock(ordered=False, items=("Three",))
    assert "exceeds 2 lines" in caplog.text


def test_example_box_keeps_its_header_and_nested_items():
    assert segment("EXAMPLE: A first call\n1. Introduce SSW\n2. Ask about soil tests") == [
        Example(
            header="EXAMPLE: A first call",
            content=(ListBlock(ordered=True, items=("Introduce SSW", "Ask about soil tests")),),
        ),
    ]


def test_email_template_fields_and_body():
    text = (
        "EMAIL TEMPLATE: First contact\n"
        "Subject: Healthier soil\n"
        "From: Jane Rep\n"
        "To: Grower\n"
        "---\n"
        "Hi there,\n"
        "We help vineyards & orchards."
    )
    assert segment(text) == [
        EmailTemplate(
            subject="Healthier soil",
            sender="Jane Rep",
            recipient="Grower",
            body_lines=("Hi there,", "We help vineyards &amp; orchards."),
        ),
    ]


def test_email_body_starts_at_the_first_non_header_line():
    (email,) = segment("Subject: Quick question\nHi Sam,\nDo you test soil?")
    assert email == EmailTemplate(
        subject="Quick question",
        body_lines=("Hi Sam,", "Do you test soil?"),
    )


def test_email_template_serializes_from_and_to():
    email = EmailTemplate(subject="S", sender="A", recipient="B")
    assert email.to_dict() == {
        "type": "emailTemplate",
        "subject": "S",
        "from": "A",
        "to": "B",
        "body_lines": [],
    }


def test_hook_point_joins_its_lines():
    assert segment("HOOK POINT: Ask how compaction\naffects their yields.") == [
        HookPoint(text="Ask how compaction affects their yields."),
    ]


def test_hook_point_stops_at_a_blank_line():
    assert segment("Hook:\nAsk about water.\n\nNext paragraph.") == [
        HookPoint(text="Ask about water."),
        Paragraph(text="Next paragraph."),
    ]


def test_hook_point_without_content_falls_back_to_a_paragraph():
    assert segment("Hook:") == [Paragraph(text="Hook:")]


def test_emphasis_takes_only_the_rest_of_its_line():
    assert segment("IMPORTANT: Always test soil first\nThen recommend a blend.") == [
        EmphasisTitle(text="Always test soil first"),
        Paragraph(text="Then recommend a blend."),
    ]


# ------------------------------------------------------------------------------------------------
# PROSPECT TABLES
# ------------------------------------------------------------------------------------------------


def test_numbered_line_with_a_field_is_a_prospect_table():
    assert segment("1. Acme Farms\nAddress: 123 Rd") == [
        ProspectTable(rows=(ProspectRow(number="1", name="Acme Farms", address="123 Rd"),)),
    ]


def test_numbered_lines_without_fields_are_a_list():
    assert segment("1. Buy seeds\n2. Water daily") == [
        ListBlock(ordered=True, items=("Buy seeds", "Water daily")),
    ]


def test_prospect_table_collects_records_and_skips_category_headers():
    text = (
        "1. Valley Vines\n"
        "Address: 12 Vine Rd, Lodi, CA\n"
        "Phone: (209) 555-0101\n"
        "Website: www.valleyvines.com\n"
        "STONE FRUITS\n"
        "2. Oak Creek Orchards\n"
        "Email: buyer@oakcreek.com"
    )
    assert segment(text) == [
        ProspectTable(
            rows=(
                ProspectRow(
                    number="1",
                    name="Valley Vines",
                    address="12 Vine Rd, Lodi, CA",
                    phone="(209) 555-0101",
                    website="www.valleyvines.com",
                ),
                ProspectRow(number="2", name="Oak Creek Orchards", email="buyer@oakcreek.com"),
            ),
        ),
    ]


def test_prospect_table_ends_at_a_label_with_a_colon():
    items = segment("1. Acme Farms\nAddress: 1 Rd\nPhone: 555-0101\nNEXT STEPS:\nCall back.")
    assert items == [
        ProspectTable(
            rows=(ProspectRow(number="1", name="Acme Farms", address="1 Rd", phone="555-0101"),),
        ),
        H4Header(text="NEXT STEPS"),
        Paragraph(text="Call back."),
    ]


def test_category_header_after_the_last_record_ends_the_table():
    assert segment("1. Acme Farms\nAddress: 1 Rd\nFOLLOW UP PLAN\nCall back next week.") == [
        ProspectTable(rows=(ProspectRow(number="1", name="Acme Farms", address="1 Rd"),)),
        H4Header(text="FOLLOW UP PLAN"),
        Paragraph(text="Call back next week."),
    ]


def test_non_field_line_ends_the_prospect_record():
    assert segment("1. Acme Farms\nAddress: 1 Rd\nFamily owned since 1950.\n2. Oak Creek") == [
        ProspectTable(rows=(ProspectRow(number="1", name="Acme Farms", address="1 Rd"),)),
        Paragraph(text="Family owned since 1950."),
        ListBlock(ordered=True, items=("Oak Creek",)),
    ]


def test_prospect_record_is_capped(monkeypatch, caplog):
    monkeypatch.setenv("PLAYBOOK_PROSPECT_MAX_LINES", "2")
    with caplog.at_level(logging.WARNING, logger="playbook"):
        (table, *_) = segment("1. Acme\nPhone: 1\nEmail: a@acme.com\nWebsite: acme.com")
    assert table == ProspectTable(
        rows=(ProspectRow(number="1", name="Acme", phone="1", email="a@acme.com"),),
    )
    assert "exceeds 2 lines" in caplog.text


# ------------------------------------------------------------------------------------------------
# IMAGES
# ------------------------------------------------------------------------------------------------


def test_image_directives_become_image_items():
    text = "[IMAGE: assets/crops/apples & pears.png]\n[FULLPAGE_IMAGE: assets/map.png]"
    assert segment(text) == [
        Image(path="assets/crops/apples &amp; pears.png"),
        FullPageImage(path="assets/map.png"),
    ]
