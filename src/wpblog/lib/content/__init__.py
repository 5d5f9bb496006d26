"""Sanitizing and reshaping of WordPress post HTML."""

from .code_blocks import rewrite_code_blocks
from .minifier import minify
from .pipeline import process_content
from .sanitizer import sanitize

__all__ = [
    "minify",
    "process_content",
    "rewrite_code_blocks",
    "sanitize",
]
