"""Sequential read/process/forward loop over binary streams.

Lines are decoded as UTF-8 with surrogateescape so undecodable bytes still
reach the regexes as lone surrogates and are re-encoded to the exact original
bytes when forwarded. One trailing "\\n" or "\\r\\n" is stripped; forwarded lines
are always written with "\\n" and flushed so output order and timing follow the
input.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from .processor import LineProcessor

logger = logging.getLogger(__name__)

ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


@dataclass
class StreamStats:
    lines: int = 0
    forwarded: int = 0
    downstream_closed: bool = False


def strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b'\r\n'):
        return raw[:-2]
    if raw.endswith(b'\n'):
        return raw[:-1]
    return raw


def run_stream(processor: LineProcessor, source: BinaryIO, sink: BinaryIO | None) -> StreamStats:
    """Feed every line of ``source`` to ``processor`` until EOF.

    ``sink`` may be None to discard forwarded lines. A closed downstream
    (BrokenPipeError) stops forwarding but metrics keep being updated until
    the input ends.
    """
    stats = StreamStats()
    for raw in source:
        line = strip_terminator(raw).decode(ENCODING, ERRORS)
        stats.lines += 1
        forward = processor.process_line(line)
        if not forward or sink is None or stats.downstream_closed:
            continue
        try:
            sink.write(line.encode(ENCODING, ERRORS) + b'\n')
            sink.flush()
        except BrokenPipeError:
            logger.warning("pass-through output closed; continuing without forwarding")
            stats.downstream_closed = True
            continue
        stats.forwarded += 1
    logger.debug("input exhausted lines=%d forwarded=%d", stats.lines, stats.forwarded)
    return stats


__all__ = ["run_stream", "strip_terminator", "StreamStats"]
