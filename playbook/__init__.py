from .partition.text import parse, partition_text
from .staging.html import render

__all__ = ["parse", "partition_text", "render"]
