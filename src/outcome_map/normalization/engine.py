"""Row normalization for survey exports."""

from __future__ import annotations

import logging
import math
import re
import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from outcome_map.config import ParserConfig
from outcome_map.normalization.rules import FIELDS, HEADER_RULES, Field, HeaderRule
from outcome_map.schema import NormalizedRow

logger = logging.getLogger(__name__)

_PLAIN_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


@dataclass(frozen=True)
class HeaderMapping:
    """Original header feeding each semantic field (``None`` when unmatched)."""

    focus: str | None = None
    outcome: str | None = None
    importance: str | None = None
    satisfaction: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in FIELDS}


@dataclass
class NormalizationStats:
    rows_seen: int = 0
    rows_dropped: int = 0
    unparsable_numbers: int = 0


@dataclass
class RowNormalizer:
    """Extracts the four semantic fields from raw CSV records."""

    config: ParserConfig = field(default_factory=ParserConfig)
    rules: tuple[HeaderRule, ...] = HEADER_RULES
    stats: NormalizationStats = field(default_factory=NormalizationStats)
    _mapping_cache: dict[tuple[str, ...], HeaderMapping] = field(default_factory=dict, init=False, repr=False)

    def resolve_headers(self, headers: Iterable[str]) -> HeaderMapping:
        key = tuple(h for h in headers if isinstance(h, str))
        cached = self._mapping_cache.get(key)
        if cached is not None:
            return cached

        mapping = resolve_headers(key, self.rules)
        self._mapping_cache[key] = mapping
        logger.debug("header mapping resolved: %s", mapping.as_dict())
        if mapping.outcome is None:
            logger.warning("no outcome column found in headers %s", list(key))
        return mapping

    def normalize(self, record: Mapping[str | None, object], line_number: int | None = None) -> NormalizedRow | None:
        """Return the normalized row, or ``None`` when the row is dropped."""
        self.stats.rows_seen += 1
        mapping = self.resolve_headers(record.keys())

        outcome_text = _cell(record, mapping.outcome).strip()
        if not outcome_text:
            self.stats.rows_dropped += 1
            logger.debug("row %s dropped: empty outcome text", line_number)
            return None

        importance = self._number(record, mapping.importance)
        satisfaction = self._number(record, mapping.satisfaction)

        return NormalizedRow(
            outcome_text=outcome_text,
            focus_label=_cell(record, mapping.focus).strip(),
            importance=importance,
            satisfaction=satisfaction,
            line_number=line_number,
        )

    def _number(self, record: Mapping[str | None, object], header: str | None) -> float | None:
        raw = _cell(record, header)
        value = parse_number(raw, self.config.decimal_sep)
        if value is None and raw.strip():
            self.stats.unparsable_numbers += 1
        return value


def resolve_headers(headers: Iterable[str], rules: Iterable[HeaderRule] = HEADER_RULES) -> HeaderMapping:
    """Match headers to semantic fields.

    Rules are applied in order; within a rule the first header (in file
    order) containing the stem wins. Each header feeds at most one field.
    """
    normalized = [(header, normalize_header(header)) for header in headers]
    claimed: set[int] = set()
    found: dict[Field, str] = {}

    for rule in rules:
        if rule.field in found:
            continue
        for index, (original, header_key) in enumerate(normalized):
            if index in claimed or not header_key:
                continue
            if rule.matches(header_key):
                found[rule.field] = original
                claimed.add(index)
                break

    return HeaderMapping(**found)


def normalize_header(value: str) -> str:
    """Lowercase, strip accents and punctuation, collapse whitespace."""
    text = unicodedata.normalize("NFKD", value)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.lower().strip()
    text = text.replace("_", " ").replace("-", " ")
    text = re.sub(r"[^\w\s]", " ", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def parse_number(raw: str | None, decimal_sep: str = ",") -> float | None:
    """Parse a locale-formatted score.

    ``decimal_sep`` is always accepted. The other separator is accepted
    only when it appears once and is not followed by exactly three
    digits, which would read as thousands grouping (so "7.125" is absent
    under comma decimals, while "7,125" is 7.125). Anything else,
    including empty cells, is ``None``; never ``0``.
    """
    if raw is None:
        return None
    text = raw.strip().replace(" ", "").replace("\u00a0", "")
    if not text:
        return None

    other_sep = "." if decimal_sep == "," else ","
    if decimal_sep in text:
        if other_sep in text or text.count(decimal_sep) != 1:
            return None
        text = text.replace(decimal_sep, ".")
    elif other_sep in text:
        if text.count(other_sep) != 1:
            return None
        _, fraction = text.split(other_sep)
        if len(fraction) == 3:
            return None
        text = text.replace(other_sep, ".")

    if not _PLAIN_NUMBER.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def _cell(record: Mapping[str | None, object], header: str | None) -> str:
    if header is None:
        return ""
    value = record.get(header)
    if value is None:
        return ""
    return str(value)
