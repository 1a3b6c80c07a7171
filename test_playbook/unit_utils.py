"""Utilities that ease unit-testing."""

from __future__ import annotations

import pathlib
from typing import List

from bs4 import BeautifulSoup

from playbook.documents.elements import ContentItem
from playbook.partition.blocks import segment_block


def example_doc_path(file_name: str) -> str:
    """Resolve the absolute-path to `file_name` in the example-docs directory."""
    example_docs_dir = pathlib.Path(__file__).parent.parent / "example-docs"
    file_path = example_docs_dir / file_name
    return str(file_path.resolve())


def example_doc_text(file_name: str) -> str:
    """Contents of example-doc `file_name` as text (decoded as utf-8)."""
    with open(example_doc_path(file_name), encoding="utf-8") as f:
        return f.read()


def segment(text: str) -> List[ContentItem]:
    """Content items of the block written as one multi-line string."""
    return segment_block(text.split("\n"))


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")
