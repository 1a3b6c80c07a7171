from __future__ import annotations

import functools
import html
import posixpath
import re
from typing import Callable, Mapping, Optional, Tuple

import emoji

from playbook.documents.mappings import ICON_MAP, PRODUCT_NAME_VARIANTS
from playbook.nlp.patterns import (
    BULLETED_ITEM_RE,
    HTML_TAG_RE,
    ICON_PLACEHOLDER_RE,
    NUMBERED_ITEM_RE,
    TAG_NAME_RE,
    URL_RE,
    URL_TRAILING_PUNCT,
)

# Elements whose text is never bolded or linkified a second time
_OPAQUE_TAGS = ("a", "strong")


def escape_html(text: str) -> str:
    """Escapes the five HTML special characters.

    Example
    -------
    Tom & Jerry's <show> -> Tom &amp; Jerry&#x27;s &lt;show&gt;
    """
    return html.escape(text, quote=True)


def clean_text(text: str, icon_map: Optional[Mapping[str, str]] = None) -> str:
    """Prepares raw source text for a content item: escapes it, then swaps mapped pictographic
    symbols for icon markup.

    Mapped symbols are first replaced by placeholder tokens so the icon markup itself is never
    escaped, then the placeholders are resolved on the escaped text.

    Example
    -------
    🍎 Apples & pears -> <i class="fas fa-apple-alt" ...></i> Apples &amp; pears
    """
    icon_map = ICON_MAP if icon_map is None else icon_map
    icons: list[str] = []

    def to_placeholder(chars: str, data_dict: dict) -> str:
        icon = icon_map.get(chars) or icon_map.get(chars.replace("\ufe0f", ""))
        if icon is None:
            return chars
        icons.append(icon)
        return f"\x00ICON{len(icons) - 1}\x00"

    tokenized = emoji.replace_emoji(text.replace("\x00", ""), replace=to_placeholder)
    escaped = escape_html(tokenized)
    return ICON_PLACEHOLDER_RE.sub(lambda m: icons[int(m.group(1))], escaped)


def clean_list_marker(text: str) -> str:
    """Removes the bullet or number marker starting a list line.

    Example
    -------
    • Hamburgers are delicious -> Hamburgers are delicious
    2. Water daily -> Water daily
    """
    match = BULLETED_ITEM_RE.match(text) or NUMBERED_ITEM_RE.match(text)
    if match is None:
        return text
    return match.groups()[-1].strip()


def caption_from_path(path: str) -> str:
    """Derives a caption from an image path by dropping the directory and the extension.

    Example
    -------
    assets/crops/Stone fruit.png -> Stone fruit
    """
    basename = posixpath.basename(path.replace("\\", "/"))
    return posixpath.splitext(basename)[0]


def map_text_outside_markup(text: str, func: Callable[[str], str]) -> str:
    """Applies `func` to the runs of `text` that are outside markup tags and outside existing
    anchor or strong elements."""
    out: list[str] = []
    depth = 0
    for part in HTML_TAG_RE.split(text):
        if not part:
            continue
        if HTML_TAG_RE.fullmatch(part):
            name_match = TAG_NAME_RE.match(part)
            if name_match and name_match.group(1).lower() in _OPAQUE_TAGS:
                depth = max(depth - 1, 0) if part.startswith("</") else depth + 1
            out.append(part)
        elif depth:
            out.append(part)
        else:
            out.append(func(part))
    return "".join(out)


@functools.lru_cache(maxsize=8)
def _product_names_re(variants: Tuple[str, ...]) -> re.Pattern[str]:
    ordered = sorted((escape_html(v) for v in variants), key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(v) for v in ordered) + r")\b", re.IGNORECASE)


def bold_product_names(text: str, variants: Tuple[str, ...] = PRODUCT_NAME_VARIANTS) -> str:
    """Wraps known product names of escaped text in <strong>, skipping markup.

    Example
    -------
    Try pomona blend today -> Try <strong>pomona</strong> blend today
    """
    if not text:
        return text
    pattern = _product_names_re(tuple(variants))
    return map_text_outside_markup(text, lambda s: pattern.sub(r"<strong>\1</strong>", s))


def _anchor_for_url(match: re.Match[str]) -> str:
    url = match.group(0)
    trailing = ""
    while url and url[-1] in URL_TRAILING_PUNCT:
        trailing = url[-1] + trailing
        url = url[:-1]
    href = url if url.lower().startswith("http") else f"https://{url}"
    return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{url}</a>{trailing}'


def linkify_urls(text: str) -> str:
    """Turns bare http(s) URLs and www. addresses of escaped text into anchors.

    Example
    -------
    See www.ssw.com. -> See <a href="https://www.ssw.com" ...>www.ssw.com</a>.
    """
    if not text:
        return text
    return map_text_outside_markup(text, lambda s: URL_RE.sub(_anchor_for_url, s))
