from __future__ import annotations

import json
from typing import Any, Optional

from playbook.documents.elements import Document


def document_to_dict(document: Document) -> dict[str, Any]:
    """Convert a document tree to a dict of plain values."""
    return document.to_dict()


def document_to_json(
    document: Document,
    filename: Optional[str] = None,
    indent: int = 4,
    encoding: str = "utf-8",
) -> Optional[str]:
    """Saves a document tree to a JSON file if filename is specified.

    Otherwise, return the document as a string.
    """
    json_str = json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)

    if filename is not None:
        with open(filename, "w", encoding=encoding) as f:
            f.write(json_str)
        return None

    return json_str
