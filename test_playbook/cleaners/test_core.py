import pytest

from playbook.cleaners import core

APPLE_ICON = '<i class="fas fa-apple-alt" style="color: #e74c3c;"></i>'
ANCHOR_ATTRS = 'target="_blank" rel="noopener noreferrer"'


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Tom & Jerry", "Tom &amp; Jerry"),
        ("<script>", "&lt;script&gt;"),
        ('say "hi"', "say &quot;hi&quot;"),
        ("grower's", "grower&#x27;s"),
        ("plain", "plain"),
    ],
)
def test_escape_html(text, expected):
    assert core.escape_html(text) == expected


def test_clean_text_escapes_before_substituting_icons():
    assert core.clean_text("\U0001F34E <Apples> & pears") == (
        f"{APPLE_ICON} &lt;Apples&gt; &amp; pears"
    )


def test_clean_text_leaves_unmapped_symbols_alone():
    assert core.clean_text("\U0001F69C tractor") == "\U0001F69C tractor"


def test_clean_text_does_not_resolve_placeholders_from_the_source():
    assert core.clean_text("a\x00ICON0\x00b") == "aICON0b"


def test_clean_text_accepts_a_custom_icon_map():
    assert core.clean_text("\U0001F69C go", icon_map={"\U0001F69C": "<i>t</i>"}) == "<i>t</i> go"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("• Hamburgers are delicious", "Hamburgers are delicious"),
        ("- Dogs are the best", "Dogs are the best"),
        ("2. Water daily", "Water daily"),
        ("No marker here", "No marker here"),
    ],
)
def test_clean_list_marker(text, expected):
    assert core.clean_list_marker(text) == expected


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("assets/crops/Stone fruit.png", "Stone fruit"),
        ("map.png", "map"),
        ("assets\\win\\picture.jpg", "picture"),
        ("assets/archive.tar.gz", "archive.tar"),
        ("no-extension", "no-extension"),
    ],
)
def test_caption_from_path(path, expected):
    assert core.caption_from_path(path) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Try pomona blend today", "Try <strong>pomona</strong> blend today"),
        ("POMONA and Bacchus", "<strong>POMONA</strong> and <strong>Bacchus</strong>"),
        (
            "Seriokai&#x27;s Secret works",
            "<strong>Seriokai&#x27;s Secret</strong> works",
        ),
        ("Pomonas are not a product", "Pomonas are not a product"),
        (
            "<strong>Pomona</strong> and Pomona",
            "<strong>Pomona</strong> and <strong>Pomona</strong>",
        ),
        (
            '<a href="https://pomona.example">Pomona site</a>',
            '<a href="https://pomona.example">Pomona site</a>',
        ),
        ("", ""),
    ],
)
def test_bold_product_names(text, expected):
    assert core.bold_product_names(text) == expected


def test_bold_product_names_is_idempotent():
    once = core.bold_product_names("Pomona, Bucchas and Serikai")
    assert core.bold_product_names(once) == once


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (
            "See www.ssw.com.",
            f'See <a href="https://www.ssw.com" {ANCHOR_ATTRS}>www.ssw.com</a>.',
        ),
        (
            "(visit https://ssw.com)",
            f'(visit <a href="https://ssw.com" {ANCHOR_ATTRS}>https://ssw.com</a>)',
        ),
        (
            "&quot;www.ssw.com&quot;",
            f'&quot;<a href="https://www.ssw.com" {ANCHOR_ATTRS}>www.ssw.com</a>&quot;',
        ),
        (
            "http://x.io/a?b=1&amp;c=2 now",
            f'<a href="http://x.io/a?b=1&amp;c=2" {ANCHOR_ATTRS}>http://x.io/a?b=1&amp;c=2</a> now',
        ),
        ("sales@ssw.com", "sales@ssw.com"),
        ("", ""),
    ],
)
def test_linkify_urls(text, expected):
    assert core.linkify_urls(text) == expected


def test_linkify_urls_skips_existing_anchors():
    once = core.linkify_urls("Go to www.ssw.com")
    assert core.linkify_urls(once) == once


def test_map_text_outside_markup_only_touches_text_runs():
    result = core.map_text_outside_markup(
        '<i class="x"></i>ab<strong>ab</strong>ab',
        str.upper,
    )
    assert result == '<i class="x"></i>AB<strong>ab</strong>AB'
