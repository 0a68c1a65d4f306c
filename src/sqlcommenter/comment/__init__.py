"""Comment grammar: encoding, merging, formatting, appending and parsing."""

from .core import append_comment, format_comment, merge_contributions
from .encoding import decode_component, encode_component, encode_value, escape_quote
from .parser import extract_comment, parse_comment

__all__ = [
    "append_comment",
    "format_comment",
    "merge_contributions",
    "decode_component",
    "encode_component",
    "encode_value",
    "escape_quote",
    "extract_comment",
    "parse_comment",
]
