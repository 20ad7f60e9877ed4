"""Parsing of free-form recording identifiers into catalogue numbers."""
from __future__ import annotations

import re
from typing import Optional

from xcfetch.errors import IdentifierOverflowError, UnrecognizedIdentifierError

MAX_CATALOGUE_ID = 2**64 - 1
XC_DOMAIN = "xeno-canto.org"

DIGITS_PATTERN = re.compile(r"[0-9]+")
PREFIXED_PATTERN = re.compile(r"xc\s*([0-9]+)", re.IGNORECASE)
URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?" + re.escape(XC_DOMAIN) + r"(?P<path>/[^?#]*)?(?:[?#].*)?",
    re.IGNORECASE,
)


def _to_catalogue_id(digits: str, text: str) -> int:
    value = int(digits)
    if value > MAX_CATALOGUE_ID:
        raise IdentifierOverflowError(text)
    if value == 0:
        raise UnrecognizedIdentifierError(text)
    return value


def _match_digits(text: str) -> Optional[str]:
    if DIGITS_PATTERN.fullmatch(text):
        return text
    match = PREFIXED_PATTERN.fullmatch(text)
    if match:
        return match.group(1)
    match = URL_PATTERN.fullmatch(text)
    if match:
        segment = (match.group("path") or "").rstrip("/").rsplit("/", 1)[-1]
        if DIGITS_PATTERN.fullmatch(segment):
            return segment
    return None


def parse_identifier(text: str) -> int:
    """Return the catalogue number for a plain number, an XC-prefixed id or a xeno-canto URL.

    >>> parse_identifier("XC928094")
    928094
    >>> parse_identifier("https://www.xeno-canto.org/928094/")
    928094
    """
    cleaned = (text or "").strip()
    digits = _match_digits(cleaned)
    if digits is None:
        raise UnrecognizedIdentifierError(text)
    return _to_catalogue_id(digits, text)
