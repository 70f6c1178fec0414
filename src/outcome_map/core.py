"""Pipeline entry points: bytes in, map dataset out."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from outcome_map.aggregation import aggregate, passthrough
from outcome_map.builder import SourceMeta, build_map
from outcome_map.config import DELIMITERS, ParserConfig
from outcome_map.encoding import decode
from outcome_map.exceptions import EmptyInputError, MalformedCSVError
from outcome_map.normalization.engine import HeaderMapping, RowNormalizer
from outcome_map.schema import AggregatedOutcome, MapDataset, NormalizedRow, SortKey
from outcome_map.scoring import score_outcomes

logger = logging.getLogger(__name__)

_SNIFF_SAMPLE_CHARS = 4096


@dataclass(frozen=True)
class ParseResult:
    """Output of the parser stage."""

    rows: tuple[NormalizedRow, ...]
    outcomes: tuple[AggregatedOutcome, ...]
    source: SourceMeta
    header_mapping: HeaderMapping
    delimiter: str


def parse_bytes(
    raw: bytes,
    *,
    config: ParserConfig | None = None,
    source_name: str = "<bytes>",
) -> ParseResult:
    """Decode, normalize and aggregate a survey export.

    Raises:
        EncodingError: If the bytes cannot be decoded in the requested mode.
        EmptyInputError: If the file has no header or no data rows.
        MalformedCSVError: If the csv reader rejects the text.
    """
    config = config or ParserConfig()
    decoded = decode(raw, config.encoding)
    logger.info("decoded %s as %s", source_name, decoded.encoding)

    delimiter = config.delimiter or sniff_delimiter(decoded.text)
    reader = csv.reader(io.StringIO(decoded.text, newline=""), delimiter=delimiter)
    normalizer = RowNormalizer(config=config)
    rows: list[NormalizedRow] = []

    try:
        header = next(reader, None)
        if not header or not any(name.strip() for name in header):
            raise EmptyInputError(f"No header row found in {source_name}")
        fieldnames = unique_headers(header)
        header_mapping = normalizer.resolve_headers(fieldnames)

        for cells in reader:
            # Only physical blank lines come back empty; ";;" rows are data.
            if not cells:
                continue
            row = normalizer.normalize(dict(zip(fieldnames, cells)), line_number=reader.line_num)
            if row is not None:
                rows.append(row)
    except csv.Error as exc:
        raise MalformedCSVError(f"Cannot read {source_name} near line {reader.line_num}: {exc}") from exc

    rows_read = normalizer.stats.rows_seen
    if rows_read == 0:
        raise EmptyInputError(f"No data rows found in {source_name}")

    outcomes = aggregate(rows, config.agg_method) if config.aggregate else passthrough(rows)

    logger.info(
        "parsed %s: rows_read=%d rows_dropped=%d outcomes=%d",
        source_name,
        rows_read,
        normalizer.stats.rows_dropped,
        len(outcomes),
    )
    if normalizer.stats.unparsable_numbers:
        logger.info("%d score cells could not be parsed", normalizer.stats.unparsable_numbers)

    return ParseResult(
        rows=tuple(rows),
        outcomes=tuple(outcomes),
        source=SourceMeta(
            source_name=source_name,
            encoding=decoded.encoding,
            rows_read=rows_read,
            rows_dropped=normalizer.stats.rows_dropped,
            aggregated=config.aggregate,
            agg_method=config.agg_method,
        ),
        header_mapping=header_mapping,
        delimiter=delimiter,
    )


def parse_file(path: str | Path, *, config: ParserConfig | None = None) -> ParseResult:
    """Read ``path`` and run the parser stage on its bytes."""
    path = Path(path)
    return parse_bytes(path.read_bytes(), config=config, source_name=path.name)


def generate(
    parsed: ParseResult,
    *,
    sort_by: SortKey | None = None,
    generated_at: datetime | None = None,
) -> MapDataset:
    """Score parsed outcomes and assemble the map dataset."""
    scored = score_outcomes(parsed.outcomes)
    return build_map(scored, parsed.source, sort_by=sort_by, generated_at=generated_at)


def build_outcome_map(
    source: str | Path | bytes,
    *,
    config: ParserConfig | None = None,
    source_name: str | None = None,
    sort_by: SortKey | None = None,
    generated_at: datetime | None = None,
) -> MapDataset:
    """Run the whole pipeline on a file path or raw bytes.

    Args:
        source: CSV path, or the file contents already read.
        config: Parser options. Defaults to ``ParserConfig()``.
        source_name: Name recorded in the metadata. Defaults to the file name.
        sort_by: Optional ordering for the renderer; input order otherwise.
        generated_at: Timestamp recorded in the metadata. Defaults to now (UTC).

    Returns:
        MapDataset with one scored outcome per distinct outcome.
    """
    if isinstance(source, bytes):
        parsed = parse_bytes(source, config=config, source_name=source_name or "<bytes>")
    else:
        path = Path(source)
        parsed = parse_bytes(path.read_bytes(), config=config, source_name=source_name or path.name)
    return generate(parsed, sort_by=sort_by, generated_at=generated_at)


def sniff_delimiter(text: str) -> str:
    """Guess the field delimiter, defaulting to a comma."""
    sample = text[:_SNIFF_SAMPLE_CHARS]
    if not sample.strip():
        return ","
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters="".join(DELIMITERS))
    except csv.Error:
        return ","
    return dialect.delimiter


def unique_headers(header: Sequence[str]) -> list[str]:
    """Suffix repeated header names so every column keeps its own value.

    The first occurrence keeps its name, so it stays first in header order.
    """
    seen: dict[str, int] = {}
    names: list[str] = []
    for name in header:
        count = seen.get(name, 0) + 1
        seen[name] = count
        names.append(name if count == 1 else f"{name} ({count})")
    return names
