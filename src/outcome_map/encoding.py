"""Turn raw CSV bytes into text."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from outcome_map.exceptions import ConfigurationError, EncodingError

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


@dataclass(frozen=True)
class DecodedText:
    text: str
    encoding: str
    fallback: bool = False


def decode(raw: bytes, mode: str = "auto") -> DecodedText:
    """Decode survey export bytes according to ``mode``.

    ``auto`` tries strict UTF-8 first and falls back to Latin-1. The order
    matters: Latin-1 accepts every byte sequence, so it can only ever be
    the last resort.

    Raises:
        EncodingError: If ``mode`` is ``utf-8`` and the bytes are not UTF-8.
    """
    mode = (mode or "auto").lower()

    if mode == "utf-8":
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(
                f"Input is not valid UTF-8 (byte {exc.start}); try --encoding iso-8859-1 or auto"
            ) from exc
        return DecodedText(text=_strip_bom(text), encoding="utf-8")

    if mode == "iso-8859-1":
        return DecodedText(text=raw.decode("iso-8859-1"), encoding="iso-8859-1")

    if mode != "auto":
        raise ConfigurationError(f"Unsupported encoding: {mode!r}")

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("input is not valid UTF-8, falling back to ISO-8859-1")
        return DecodedText(text=raw.decode("iso-8859-1"), encoding="iso-8859-1", fallback=True)
    return DecodedText(text=_strip_bom(text), encoding="utf-8")


def resolve(raw: bytes, mode: str = "auto") -> str:
    """Return the decoded text of ``raw``."""
    return decode(raw, mode).text


def _strip_bom(text: str) -> str:
    # Excel exports prepend a BOM to UTF-8 files.
    return text[1:] if text.startswith(_BOM) else text
