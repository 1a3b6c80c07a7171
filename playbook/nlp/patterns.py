import re
from typing import Final, List

# -- document structure --------------------------------------------------------------------------

SECTION_SEPARATOR_PATTERN = r"^=+$"
SECTION_SEPARATOR_RE = re.compile(SECTION_SEPARATOR_PATTERN)

# NOTE: a section header is only a header when the *next* line is a separator, so this
# pattern alone also matches numbered list items and table-of-contents entries
SECTION_HEADER_PATTERN = r"^(\d+)\.\s+(.+)$"
SECTION_HEADER_RE = re.compile(SECTION_HEADER_PATTERN)

SUBSECTION_HEADER_PATTERN = r"^(\d+)\.(\d+)\s+(.+)$"
SUBSECTION_HEADER_RE = re.compile(SUBSECTION_HEADER_PATTERN)

TABLE_OF_CONTENTS_MARKER = "TABLE OF CONTENTS"

# Captures the first line of the body once the table of contents is over, e.g. "1. PURPOSE"
SECTION_START_PATTERN = r"^\d+\.\s+[A-Z]"
SECTION_START_RE = re.compile(SECTION_START_PATTERN)

# Dotted page reference closing a table-of-contents entry, e.g. "..... Page 4"
PAGE_REFERENCE_PATTERN = r"(?:\.{2,}|\s)\s*Page\s+\d+\s*$"
PAGE_REFERENCE_RE = re.compile(PAGE_REFERENCE_PATTERN)

TOC_ENTRY_PATTERN = r"^(\d+)\.\s+(.+?)(?:\s*\.{2,}\s*Page\s+(\d+))?\s*$"
TOC_ENTRY_RE = re.compile(TOC_ENTRY_PATTERN)

TOC_SUBENTRY_PATTERN = r"^(\d+)\.(\d+)\s+(.+?)\s*$"
TOC_SUBENTRY_RE = re.compile(TOC_SUBENTRY_PATTERN)

# -- image directives ----------------------------------------------------------------------------

FULLPAGE_IMAGE_PATTERN = r"(?i)^\[FULLPAGE_IMAGE:\s*(.+)\]$"
FULLPAGE_IMAGE_RE = re.compile(FULLPAGE_IMAGE_PATTERN)

IMAGE_PATTERN = r"(?i)^\[IMAGE:\s*(.+)\]$"
IMAGE_RE = re.compile(IMAGE_PATTERN)

# -- labels --------------------------------------------------------------------------------------

# NOTE: the colon form accepts inner colons so "NOTE: SEE BELOW:" is one label
CAPS_LABEL_WITH_COLON_PATTERN = r"^[A-Z][A-Z\s&/()\-:]+:$"
CAPS_LABEL_WITH_COLON_RE = re.compile(CAPS_LABEL_WITH_COLON_PATTERN)

CAPS_LABEL_PATTERN = r"^[A-Z][A-Z\s&/()\-]+$"
CAPS_LABEL_RE = re.compile(CAPS_LABEL_PATTERN)

CAPS_LABEL_MIN_LENGTH: Final[int] = 6
CAPS_LABEL_EXCLUDED_PREFIXES: Final[List[str]] = ["TOTAL"]

# -- special block openers -----------------------------------------------------------------------

KEY_POINTS_OPENER_RE = re.compile(r"(?i)^(?:KEY|NOTE:|DATA TO CAPTURE)")
EMAIL_OPENER_RE = re.compile(r"(?i)^(?:EMAIL TEMPLATE:|SUBJECT:|FROM:|TO:)")
HOOK_POINT_OPENER_RE = re.compile(r"(?i)^(?:HOOK POINT:|HOOK:)")
EXAMPLE_OPENER_RE = re.compile(r"(?i)^(?:EXAMPLE:|CASE STUDY:)")
EMPHASIS_RE = re.compile(r"(?i)^(?:EMPHASIS:|IMPORTANT:|CRITICAL:)\s*(.+)$")

EMAIL_SUBJECT_RE = re.compile(r"(?i)^SUBJECT:\s*(.+)$")
EMAIL_FROM_RE = re.compile(r"(?i)^FROM:\s*(.+)$")
EMAIL_TO_RE = re.compile(r"(?i)^TO:\s*(.+)$")

DASH_RULE_PATTERN = r"^-{3,}$"
DASH_RULE_RE = re.compile(DASH_RULE_PATTERN)

# -- lists and prospect records ------------------------------------------------------------------

BULLETS: Final[List[str]] = ["•", r"\-", r"\*"]
BULLETS_PATTERN = "|".join(BULLETS)

BULLETED_ITEM_PATTERN = rf"^(?:{BULLETS_PATTERN})\s+(.+)$"
BULLETED_ITEM_RE = re.compile(BULLETED_ITEM_PATTERN)

# NOTE: only supports one level numbered list, e.g. 1. 2. 3., not 1.1 1.2 1.3
NUMBERED_ITEM_PATTERN = r"^(\d+)\.\s+(.+)$"
NUMBERED_ITEM_RE = re.compile(NUMBERED_ITEM_PATTERN)

LIST_MARKER_PATTERN = rf"^(?:{BULLETS_PATTERN}|\d+\.)\s+"
LIST_MARKER_RE = re.compile(LIST_MARKER_PATTERN)

NESTED_LIST_MARKER_PATTERN = rf"^(\s+)(?:{BULLETS_PATTERN}|\d+\.)\s+"
NESTED_LIST_MARKER_RE = re.compile(NESTED_LIST_MARKER_PATTERN)

PROSPECT_FIELD_PATTERN = r"(?i)^(Address|Phone|Email|Website):\s*(.*)$"
PROSPECT_FIELD_RE = re.compile(PROSPECT_FIELD_PATTERN)

# -- inline text ---------------------------------------------------------------------------------

# NOTE: runs on escaped text, so an escaped quote or angle bracket ends the URL
URL_PATTERN = r"(?:https?://|\bwww\.)(?:(?!&(?:quot|#x27|#39|lt|gt);)[^\s<>\"])+"
URL_RE = re.compile(URL_PATTERN)
URL_TRAILING_PUNCT = ".,;:!?)"

# Splits escaped text into markup tags and the text between them
HTML_TAG_PATTERN = r"(<[^>]*>)"
HTML_TAG_RE = re.compile(HTML_TAG_PATTERN)

ICON_PLACEHOLDER_PATTERN = r"\x00ICON(\d+)\x00"
ICON_PLACEHOLDER_RE = re.compile(ICON_PLACEHOLDER_PATTERN)

TAG_NAME_PATTERN = r"</?\s*([A-Za-z][A-Za-z0-9]*)"
TAG_NAME_RE = re.compile(TAG_NAME_PATTERN)
