"""
Record Parsing.

A record is one line of an extraction file split on a single-character
delimiter. Quoting is not interpreted: quotes stay part of the field and
take part in key comparisons, so `"CUST1"` and `CUST1` are different keys.
"""

from __future__ import annotations

from typing import List, Optional


class MalformedRecordError(Exception):
    """Raised when a record has fewer fields than its join key requires."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        field_index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.field_index = field_index


def strip_line_ending(line: str) -> str:
    """Remove a trailing LF or CRLF, leaving all other characters intact."""
    return line.rstrip("\r\n")


def split_record(line: str, delimiter: str = ",") -> List[str]:
    """Split a record line into its raw fields."""
    return line.split(delimiter)


def join_key(
    fields: List[str],
    index: int,
    line_number: Optional[int] = None,
) -> str:
    """
    Return the join key at a positional field index.

    Args:
        fields: Fields of the record
        index: Position of the join key
        line_number: 1-based line number, for error reporting

    Returns:
        The raw field value

    Raises:
        MalformedRecordError: If the record is too short
    """
    if index >= len(fields):
        where = f" on line {line_number}" if line_number is not None else ""
        raise MalformedRecordError(
            f"record{where} has {len(fields)} field(s), "
            f"join key needs field {index}",
            line_number=line_number,
            field_index=index,
        )
    return fields[index]
