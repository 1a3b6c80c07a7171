# Page 1 is the cover, page 2 the table of contents, sections start at page 3
COVER_PAGE_NUMBER = 1
TOC_PAGE_NUMBER = 2
FIRST_SECTION_PAGE_NUMBER = 3

# Lines after a box opener that may be ALL-CAPS labels without closing the box
KEY_POINTS_LEAD_IN = 1
HOOK_POINT_LEAD_IN = 1
EXAMPLE_LEAD_IN = 3
EMAIL_LEAD_IN = 5

# Email bodies longer than this end at the next blank line
EMAIL_BODY_SOFT_LIMIT = 10
