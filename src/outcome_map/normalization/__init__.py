"""Normalization utilities for outcome-map."""

from outcome_map.normalization.engine import (
    HeaderMapping,
    RowNormalizer,
    normalize_header,
    parse_number,
    resolve_headers,
)
from outcome_map.normalization.rules import HEADER_RULES, HeaderRule

__all__ = [
    "HEADER_RULES",
    "HeaderMapping",
    "HeaderRule",
    "RowNormalizer",
    "normalize_header",
    "parse_number",
    "resolve_headers",
]
