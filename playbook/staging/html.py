"""Renders a parsed playbook as a paginated HTML fragment.

The fragment holds one `<div class="page">` container per page: the cover, the table of contents
and one per section. Text of content items arrives escaped; the renderer only adds markup, bolds
product names and links bare URLs.
"""

from __future__ import annotations

import dataclasses as dc
import html
import posixpath
import re
from typing import List, Optional, Sequence, Set, Tuple

from playbook.cleaners.core import (
    bold_product_names,
    caption_from_path,
    clean_text,
    escape_html,
    linkify_urls,
)
from playbook.documents.elements import (
    ContentItem,
    Document,
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
    ProspectTable,
    Section,
    Subsection,
    TocSection,
)
from playbook.documents.mappings import (
    COVER_ABOUT_PREFIX,
    COVER_BRAND,
    COVER_DESCRIPTION_MARKER,
    COVER_LOGO_ALT,
    COVER_LOGO_FILENAME,
    COVER_SUBTITLE_MARKER,
    COVER_TITLE_PREFIX,
    COVER_VERSION_MARKER,
    IMAGE_MAP,
    PRODUCT_CUES,
    PRODUCT_IMAGE_CLASS,
    STRUCTURAL_IMAGES,
    ImagePlacement,
)
from playbook.logger import logger, trace_logger
from playbook.partition.utils.config import env_config
from playbook.partition.utils.constants import COVER_PAGE_NUMBER, TOC_PAGE_NUMBER
from playbook.staging.normalize import generate_toc, normalize_document


@dc.dataclass(frozen=True)
class RenderConfig:
    """Options of a render; defaults are read from the environment when the config is created."""

    assets_dir: str = dc.field(default_factory=lambda: env_config.ASSETS_DIR)
    excluded_section_pattern: str = dc.field(
        default_factory=lambda: env_config.EXCLUDED_SECTION_PATTERN
    )


def render(document: Document, *, config: Optional[RenderConfig] = None) -> str:
    """Normalizes `document` and renders it as an HTML fragment.

    Example
    -------
    >>> from playbook import parse, render
    >>> html = render(parse("example-docs/playbook-sample.txt"))
    """
    return HtmlRenderer(document, config=config).render()


class HtmlRenderer:
    """Renders one document.

    The set of images already placed is created fresh at the start of every `render()` call, so
    repeated renders of the same document produce identical output.
    """

    def __init__(self, document: Document, config: Optional[RenderConfig] = None):
        self._document = document
        self._config = config if config is not None else RenderConfig()
        self._placed_images: Set[str] = set()

    def render(self) -> str:
        self._placed_images = set()

        sections = normalize_document(
            self._document,
            excluded_section_pattern=self._config.excluded_section_pattern,
        ).sections
        toc = generate_toc(sections)

        pages = [self._render_cover_page(self._document.cover_page_lines), self._render_toc(toc)]
        pages.extend(
            self._render_section(section, entry.page_number or 0)
            for section, entry in zip(sections, toc)
        )

        logger.info(
            f"Rendered playbook: {len(pages)} pages, {len(self._placed_images)} images placed",
        )
        return "".join(pages)

    # -- cover and table of contents ---------------------------------------------------------

    def _render_cover_page(self, lines: Sequence[str]) -> str:
        logo_src = escape_html(self._asset_path(COVER_LOGO_FILENAME))
        parts = [
            '<div class="page" id="cover">\n',
            '<div class="cover-page">\n',
            '<div class="logo-container">\n',
            f'<img src="{logo_src}" alt="{escape_html(COVER_LOGO_ALT)}" class="logo" '
            'id="ssw-logo" style="display: none" />\n',
            "</div>\n",
        ]

        texts = [line.strip() for line in lines]
        i = 0
        while i < len(texts):
            text = texts[i]
            if COVER_BRAND in text:
                parts.append(
                    '<div style="font-size: 16pt; margin-bottom: 20pt; color: #7f8c8d">'
                    f"{escape_html(COVER_BRAND)}</div>\n",
                )
            elif text.startswith(COVER_TITLE_PREFIX):
                title_lines, i = _take_until(texts, i, COVER_SUBTITLE_MARKER)
                parts.append(
                    f'<div class="cover-title">\n{"<br />".join(map(clean_text, title_lines))}\n'
                    "</div>\n",
                )
                continue
            elif COVER_SUBTITLE_MARKER in text:
                parts.append(f'<div class="cover-subtitle">{clean_text(text)}</div>\n')
            elif COVER_DESCRIPTION_MARKER in text:
                description_lines, i = _take_until(texts, i, COVER_VERSION_MARKER)
                parts.append(
                    '<div style="font-size: 12pt; margin-top: 30pt; color: #7f8c8d">\n'
                    f"{''.join(clean_text(line) + '<br />' for line in description_lines)}\n"
                    "</div>\n",
                )
                continue
            elif COVER_VERSION_MARKER in text:
                following = texts[i + 1] if i + 1 < len(texts) else ""
                parts.append(
                    '<div class="cover-info">\n<br /><br />\n'
                    f"{clean_text(text)}<br />\n{clean_text(following)}\n</div>\n",
                )
                i += 1
            elif COVER_ABOUT_PREFIX in text:
                about_lines, i = _take_until(texts, i, None)
                parts.append(
                    '<div style="margin-top: 60pt; font-size: 10pt; color: #95a5a6; '
                    'max-width: 6in; margin-left: auto; margin-right: auto">\n'
                    f"{''.join(clean_text(line) + '<br />' for line in about_lines)}\n"
                    "</div>\n",
                )
                break
            i += 1

        parts.append("</div>\n")
        parts.append(f'<div class="page-number">{COVER_PAGE_NUMBER}</div>\n')
        parts.append("</div>\n")
        return "".join(parts)

    def _render_toc(self, toc: Sequence[TocSection]) -> str:
        parts = [
            '<div class="page" id="toc">\n',
            "<h1>TABLE OF CONTENTS</h1>\n",
            '<div class="toc">\n',
        ]
        for entry in toc:
            parts.append('<div class="toc-item">\n')
            parts.append(
                f'<a href="#{entry.anchor}">{entry.number}. {clean_text(entry.title)} '
                f"<span>Page {entry.page_number}</span></a>\n",
            )
            for sub in entry.subsections:
                parts.append(
                    f'<div class="toc-subitem"><a href="#{entry.anchor}-{sub.number}">'
                    f"{entry.number}.{sub.number} {clean_text(sub.title)}</a></div>\n",
                )
            parts.append("</div>\n")
        parts.append("</div>\n")
        parts.append(f'<div class="page-number">{TOC_PAGE_NUMBER}</div>\n')
        parts.append("</div>\n")
        return "".join(parts)

    # -- sections ----------------------------------------------------------------------------

    def _render_section(self, section: Section, page_number: int) -> str:
        parts = [
            f'<div class="page" id="{section.anchor}">\n',
            '<div class="page-content">\n',
            f"<h2>{section.number}. {clean_text(section.title)}</h2>\n",
            self._render_items(section.content),
        ]
        parts.extend(self._render_subsection(sub) for sub in section.subsections)
        parts.append("</div>\n")
        parts.append(f'<div class="page-number">{page_number}</div>\n')
        parts.append("</div>\n")
        return "".join(parts)

    def _render_subsection(self, subsection: Subsection) -> str:
        title = subsection.title.lower()
        structural = [image for image in STRUCTURAL_IMAGES if image.title_fragment in title]
        product = self._product_placement_for_title(title)

        parts = [
            f'<h3 id="{subsection.anchor}">{subsection.identifier} '
            f"{clean_text(subsection.title)}</h3>\n",
        ]
        for image in structural:
            if image.wrapper_class:
                parts.append(f'<div class="{image.wrapper_class}">\n')
        if product is not None:
            parts.append('<div class="product-section">\n')
            parts.append(self._place_image(product))

        parts.append(self._render_items(subsection.content))

        if product is not None:
            parts.append("</div>\n")
        for image in structural:
            parts.append(self._place_image(IMAGE_MAP[image.image_key]))
            if image.wrapper_class:
                parts.append("</div>\n")
        return "".join(parts)

    def _product_placement_for_title(self, title: str) -> Optional[ImagePlacement]:
        """The product image of the first image keyword found in `title`, if not yet placed."""
        for keyword, placement in IMAGE_MAP.items():
            if keyword in title and placement.filename not in self._placed_images:
                return placement if placement.css_class == PRODUCT_IMAGE_CLASS else None
        return None

    # -- content items -----------------------------------------------------------------------

    def _render_items(self, items: Sequence[ContentItem]) -> str:
        """Renders a content list, wrapping each product description with its image.

        A paragraph that starts a product description opens a product section holding the
        product image; the section closes at the next product-start paragraph or at the end of
        `items`. Each product image is placed once per render.
        """
        parts: List[str] = []
        in_product_section = False
        for item in items:
            if isinstance(item, Paragraph) and (key := _product_cue(item.text)) is not None:
                if in_product_section:
                    parts.append("</div>\n")
                    in_product_section = False
                placement = IMAGE_MAP[key]
                if placement.filename not in self._placed_images:
                    parts.append('<div class="product-section">\n')
                    parts.append(self._place_image(placement))
                    in_product_section = True
            parts.append(self._render_item(item))
        if in_product_section:
            parts.append("</div>\n")
        return "".join(parts)

    def _render_item(self, item: ContentItem) -> str:
        if isinstance(item, Paragraph):
            return f"<p>{_inline(item.text)}</p>\n"
        elif isinstance(item, ListBlock):
            tag = "ol" if item.ordered else "ul"
            list_items = "".join(f"<li>{_inline(text)}</li>\n" for text in item.items)
            return f"<{tag}>\n{list_items}</{tag}>\n"
        elif isinstance(item, H4Header):
            return f"<h4>{item.text}</h4>\n"
        elif isinstance(item, KeyPointsBox):
            return self._render_box("key-points", item.header, item.content)
        elif isinstance(item, Example):
            return self._render_box("example-box", item.header, item.content)
        elif isinstance(item, EmailTemplate):
            return _render_email(item)
        elif isinstance(item, HookPoint):
            return (
                '<div class="hook-point-box">\n'
                f'  <div class="hook-point-content">{item.text}</div>\n'
                "</div>\n"
            )
        elif isinstance(item, EmphasisTitle):
            return f'<div class="emphasis-title">{item.text}</div>\n'
        elif isinstance(item, ProspectTable):
            return _render_prospect_table(item)
        elif isinstance(item, FullPageImage):
            return _render_image_directive("full-page-image-container", item.path)
        elif isinstance(item, Image):
            return _render_image_directive("image-container", item.path)

        trace_logger.detail(f"No markup for content item {type(item).__name__}, skipping")  # type: ignore # noqa: E501
        return ""

    def _render_box(self, css_class: str, header: str, content: Sequence[ContentItem]) -> str:
        heading = f"<h4>{header}</h4>\n" if header else ""
        return f'<div class="{css_class}">\n{heading}{self._render_items(content)}</div>\n'

    # -- images ------------------------------------------------------------------------------

    def _asset_path(self, filename: str) -> str:
        if not self._config.assets_dir:
            return filename
        return posixpath.join(self._config.assets_dir, filename)

    def _place_image(self, placement: ImagePlacement) -> str:
        self._placed_images.add(placement.filename)
        return (
            f'<div class="image-container {placement.css_class}">\n'
            f'  <img src="{escape_html(self._asset_path(placement.filename))}" '
            f'alt="{escape_html(placement.alt)}" />\n'
            f'  <div class="image-caption">{escape_html(placement.caption)}</div>\n'
            "</div>\n"
        )


def _take_until(texts: Sequence[str], start: int, marker: Optional[str]) -> Tuple[List[str], int]:
    """Collects lines from `start` up to a blank line or a line containing `marker`."""
    collected: List[str] = []
    i = start
    while i < len(texts) and texts[i] and (marker is None or i == start or marker not in texts[i]):
        collected.append(texts[i])
        i += 1
    return collected, i


def _product_cue(text: str) -> Optional[str]:
    """Returns the image key of the product whose description `text` starts, if any."""
    lowered = html.unescape(text).lower()
    for cue in PRODUCT_CUES:
        if any(phrase in lowered for phrase in cue.phrases):
            return cue.image_key
        if re.match(cue.numbered_name_pattern, lowered) and any(
            word in lowered for word in cue.context_words
        ):
            return cue.image_key
    return None


def _inline(text: str) -> str:
    return bold_product_names(linkify_urls(text))


def _render_email(email: EmailTemplate) -> str:
    header = "".join(
        f'<div class="field"><span class="field-label">{label}:</span> {value}</div>\n'
        for label, value in (
            ("Subject", email.subject),
            ("From", email.sender),
            ("To", email.recipient),
        )
        if value
    )
    body = "".join(f"<p>{line}</p>\n" if line else "<br />\n" for line in email.body_lines)
    return (
        '<div class="email-example">\n'
        f'<div class="email-header">\n{header}</div>\n'
        f'<div class="email-body">\n{body}</div>\n'
        "</div>\n"
    )


def _render_prospect_table(table: ProspectTable) -> str:
    columns = ("#", "Name", "Address", "Phone", "Email", "Website")
    head = "".join(f"<th>{column}</th>\n" for column in columns)
    rows = "".join(
        "<tr>\n"
        f"<td>{row.number}</td>\n"
        f"<td><strong>{row.name}</strong></td>\n"
        f"<td>{row.address}</td>\n"
        f"<td>{linkify_urls(row.phone)}</td>\n"
        f"<td>{linkify_urls(row.email)}</td>\n"
        f"<td>{linkify_urls(row.website)}</td>\n"
        "</tr>\n"
        for row in table.rows
    )
    return (
        '<div class="prospect-table-container">\n'
        '<table class="prospect-table">\n'
        f"<thead>\n<tr>\n{head}</tr>\n</thead>\n"
        f"<tbody>\n{rows}</tbody>\n"
        "</table>\n"
        "</div>\n"
    )


def _render_image_directive(css_class: str, path: str) -> str:
    caption = caption_from_path(path)
    return (
        f'<div class="{css_class}">\n'
        f'  <img src="{path}" alt="{caption}" />\n'
        f'  <div class="image-caption">{caption}</div>\n'
        "</div>\n"
    )
