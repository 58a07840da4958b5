"""Parser interfaces for annotate tool output."""

from __future__ import annotations

from collections.abc import Iterable

from tfvc_blame.errors import InvalidOutputError, TfvcBlameError
from tfvc_blame.models import AnnotationRecord


class ParserError(TfvcBlameError):
    """Raised when a single line of output is not a valid annotation record."""


class BaseParser:
    """Base interface for annotate output parsers."""

    name: str = "base"

    def parse_line(self, raw_line: str) -> AnnotationRecord:
        raise NotImplementedError("Parsers must implement parse_line()")

    def parse(self, lines: Iterable[str], *, file_path: str) -> list[AnnotationRecord]:
        """Parse every output line in order, stopping at the first malformed one.

        Line numbers in errors count lines of the captured output, starting at 1.
        """

        records: list[AnnotationRecord] = []
        for line_number, raw_line in enumerate(lines, start=1):
            try:
                records.append(self.parse_line(raw_line))
            except ParserError as exc:
                raise InvalidOutputError(raw_line, file_path, line_number) from exc
        return records
