"""
Component encoding for the key='value' comment grammar.

Keys and values are percent-encoded as UTF-8 so that the grammar's own
delimiters (`=`, `,`, `'`, `/*`, `*/`) and whitespace cannot appear raw.
Only ASCII alphanumerics and `-_.~` survive encoding, plus the single quote,
which is escaped afterwards as `\\'`.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

_SAFE = "'"
_ESCAPED_QUOTE = "\\'"


def encode_component(s: str) -> str:
    """Percent-encode a key or value. Total over str, empty in -> empty out."""
    # surrogatepass keeps lone surrogates encodable instead of raising.
    return quote(s, safe=_SAFE, encoding="utf-8", errors="surrogatepass")


def escape_quote(encoded: str) -> str:
    return encoded.replace("'", _ESCAPED_QUOTE)


def encode_value(value: str) -> str:
    """Encode then escape; the result is safe to wrap in single quotes."""
    return escape_quote(encode_component(value))


def decode_component(s: str) -> str:
    """
    Inverse of encode_value (and of encode_component, which never emits `\\'`).

    A backslash in the original text is always percent-encoded, so any raw
    `\\'` in `s` can only come from escape_quote.
    """
    return unquote(s.replace(_ESCAPED_QUOTE, "'"), encoding="utf-8", errors="surrogatepass")
