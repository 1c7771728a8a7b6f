"""Memory trace decoding.

A trace has one access per line:

    s 0x1fffff50 1
    l 0x1fffff58 0

The first field is the operation (`l` load, `s` store), the second the
address in hex (the `0x` prefix is optional) and the third is ignored.
Blank lines are skipped.
"""
from typing import Iterable, Iterator, Optional, Union

from csim.core.access import Access, AccessKind


class TraceFormatError(ValueError):
    """Raised for a trace line that can't be decoded."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def parse_trace_line(line: Union[str, bytes], line_number: Optional[int] = None) -> Optional[Access]:
    """Decode one trace line (text, or UTF-8 bytes). Returns None for a blank line."""
    if isinstance(line, bytes):
        try:
            line = line.decode('utf-8')
        except UnicodeDecodeError:
            raise TraceFormatError("line is not valid UTF-8", line_number,
                                   line.decode('utf-8', errors='replace')) from None
    fields = line.split()
    if not fields:
        return None
    if len(fields) != 3:
        raise TraceFormatError(f"expected 3 fields, got {len(fields)}", line_number, line)

    op, addr, _ = fields
    try:
        kind = AccessKind.from_token(op)
    except ValueError:
        raise TraceFormatError(f"unknown operation {op!r}", line_number, line) from None
    try:
        address = int(addr, 16)
    except ValueError:
        raise TraceFormatError(f"bad hex address {addr!r}", line_number, line) from None
    if address < 0:
        raise TraceFormatError(f"negative address {addr!r}", line_number, line)
    return Access(kind, address)


def read_trace(lines: Iterable[Union[str, bytes]]) -> Iterator[Access]:
    """Lazily decode a stream of trace lines (a text or binary file, or stdin)."""
    for number, line in enumerate(lines, start=1):
        access = parse_trace_line(line, number)
        if access is not None:
            yield access
