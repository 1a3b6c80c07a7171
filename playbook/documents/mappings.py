"""
This module contains the static domain tables used while parsing and rendering a playbook:
pictographic symbol -> icon markup, keyword -> image placement, product name variants and the
cues that mark the start of a product description, and the cover page anchors.

New domain terms are added here; parser and renderer logic does not change.
"""

from __future__ import annotations

import dataclasses as dc
from typing import Dict, Tuple


@dc.dataclass(frozen=True)
class ImagePlacement:
    """An image inserted by the renderer rather than by an `[IMAGE: ...]` directive."""

    filename: str
    alt: str
    caption: str
    css_class: str


@dc.dataclass(frozen=True)
class ProductCue:
    """Heuristics recognising the paragraph that introduces a product.

    A paragraph starts the product description when it contains one of `phrases`, or when it is a
    numbered line whose first word matches `numbered_name_pattern` and it mentions one of
    `context_words`.
    """

    image_key: str
    phrases: Tuple[str, ...]
    numbered_name_pattern: str
    context_words: Tuple[str, ...]


@dc.dataclass(frozen=True)
class StructuralImage:
    """An image appended to the end of every subsection whose title contains `title_fragment`."""

    title_fragment: str
    image_key: str
    wrapper_class: str | None


# -- symbol substitution -------------------------------------------------------------------------

ICON_MAP: Dict[str, str] = {
    "\U0001F34E": '<i class="fas fa-apple-alt" style="color: #e74c3c;"></i>',
    "\U0001F351": '<i class="fas fa-seedling" style="color: #f39c12;"></i>',
    "\U0001F330": '<i class="fas fa-seedling" style="color: #8b4513;"></i>',
    "\U0001F951": '<i class="fas fa-leaf" style="color: #27ae60;"></i>',
    "\U0001F34A": '<i class="fas fa-lemon" style="color: #f39c12;"></i>',
    "\U0001F347": '<i class="fas fa-wine-bottle" style="color: #8e44ad;"></i>',
    "\U0001F95C": '<i class="fas fa-circle" style="color: #d4a574;"></i>',
}

# -- image placement -----------------------------------------------------------------------------

# NOTE: ordered, the first keyword found in a text wins
IMAGE_MAP: Dict[str, ImagePlacement] = {
    "pomona": ImagePlacement(
        filename="Pomona10lbs.jpg",
        alt="Pomona Blend - 9 lb bag",
        caption="Pomona Blend - 9 lb bag",
        css_class="product-image",
    ),
    "seriokai": ImagePlacement(
        filename="Seriokai10lbs.jpg",
        alt="Seriokai's Secret Blend - 9 lb bag",
        caption="Seriokai's Secret Blend - 9 lb bag",
        css_class="product-image",
    ),
    "serikai": ImagePlacement(
        filename="Seriokai10lbs.jpg",
        alt="Seriokai's Secret Blend - 9 lb bag",
        caption="Seriokai's Secret Blend - 9 lb bag",
        css_class="product-image",
    ),
    "bucchas": ImagePlacement(
        filename="Bacchus1CF.jpg",
        alt="Bacchus Blend - 1 CF bag",
        caption="Bacchus Blend - 1 CF bag",
        css_class="product-image",
    ),
    "bacchus": ImagePlacement(
        filename="Bacchus1CF.jpg",
        alt="Bacchus Blend - 1 CF bag",
        caption="Bacchus Blend - 1 CF bag",
        css_class="product-image",
    ),
    "crop focus": ImagePlacement(
        filename="Crop focus.png",
        alt="Crop Focus",
        caption="Crop Focus",
        css_class="crop-focus-image",
    ),
    "common crop challenges": ImagePlacement(
        filename="orchard soil compaction.png",
        alt="Orchard soil compaction",
        caption="Orchard soil compaction",
        css_class="crop-challenges-image",
    ),
    "geographic scope": ImagePlacement(
        filename="300miradiouspicture.png",
        alt="300-mile target radius from SSW operations",
        caption="300-mile priority radius from SSW operations",
        css_class="geo-scope",
    ),
}

PRODUCT_IMAGE_CLASS = "product-image"

STRUCTURAL_IMAGES: Tuple[StructuralImage, ...] = (
    StructuralImage("crop focus", "crop focus", None),
    StructuralImage("geographic scope", "geographic scope", "geo-scope-wrap"),
    StructuralImage("common crop challenges", "common crop challenges", "crop-challenges-wrap"),
)

# -- products ------------------------------------------------------------------------------------

PRODUCT_CUES: Tuple[ProductCue, ...] = (
    ProductCue(
        image_key="pomona",
        phrases=("pomona blend",),
        numbered_name_pattern=r"^\d+\.\s*pomona",
        context_words=("orchards",),
    ),
    ProductCue(
        image_key="seriokai",
        phrases=("serikai", "seriokai's secret"),
        numbered_name_pattern=r"^\d+\.\s*seri?okai",
        context_words=("avocados", "citrus"),
    ),
    ProductCue(
        image_key="bucchas",
        phrases=("bucchas blend", "bacchus"),
        numbered_name_pattern=r"^\d+\.\s*(?:bucchas|bacchus)",
        context_words=("vineyards",),
    ),
)

# NOTE: longest variants first so "Seriokai's Secret" is bolded as one run
PRODUCT_NAME_VARIANTS: Tuple[str, ...] = (
    "Seriokai's Secret",
    "Serikai's Secret",
    "Seriokai",
    "Serikai",
    "Pomona",
    "Bucchas",
    "Bacchus",
)

# -- cover page ----------------------------------------------------------------------------------

COVER_BRAND = "SOIL SEED & WATER"
COVER_TITLE_PREFIX = "A specialty"
COVER_SUBTITLE_MARKER = "Business-to-Business"
COVER_DESCRIPTION_MARKER = "Complete Guide"
COVER_VERSION_MARKER = "Version"
COVER_ABOUT_PREFIX = "This document provides"

COVER_LOGO_FILENAME = "logo/ssw-logo.png"
COVER_LOGO_ALT = "Soil Seed & Water Logo"
