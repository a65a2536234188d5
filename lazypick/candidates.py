"""Candidate ingestion from a byte stream (normally piped stdin)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def decode_line(raw: bytes) -> str | None:
    """Strip the line terminator and decode UTF-8; ``None`` if undecodable."""
    if raw.endswith(b"\r\n"):
        raw = raw[:-2]
    elif raw.endswith(b"\n"):
        raw = raw[:-1]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def read_candidates(stream: Iterable[bytes]) -> tuple[str, ...]:
    """Read every line until EOF, dropping lines that fail to decode."""
    candidates: list[str] = []
    dropped = 0
    for raw in stream:
        line = decode_line(raw)
        if line is None:
            dropped += 1
            continue
        candidates.append(line)
    if dropped:
        logger.debug("dropped %d undecodable input lines", dropped)
    logger.debug("read %d candidates", len(candidates))
    return tuple(candidates)
