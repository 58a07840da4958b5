"""Parser for the tab-delimited records written by the TFVC annotate tool."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ValidationError

from tfvc_blame.constants import AUTHOR_FIELD, DATE_FIELD, FIELD_COUNT, FIELD_SEPARATOR, REVISION_FIELD
from tfvc_blame.models import AnnotationRecord

from .base import BaseParser, ParserError


class TfvcAnnotateParser(BaseParser):
    """Parse lines shaped as ``<changeset>\\t<author>\\t<epoch milliseconds>``."""

    name = "tfvc_annotate"

    def parse_line(self, raw_line: str) -> AnnotationRecord:
        fields = raw_line.split(FIELD_SEPARATOR)
        if len(fields) != FIELD_COUNT:
            raise ParserError(f"Expected {FIELD_COUNT} fields but got {len(fields)}")

        revision = fields[REVISION_FIELD].strip()
        author = fields[AUTHOR_FIELD].strip()
        if not revision:
            raise ParserError("Empty changeset id")
        if not author:
            raise ParserError("Empty author")

        date = self._parse_date(fields[DATE_FIELD].strip())
        try:
            return AnnotationRecord(revision=revision, author=author, date=date)
        except ValidationError as exc:  # pragma: no cover - fields are checked above
            raise ParserError(str(exc)) from exc

    @staticmethod
    def _parse_date(value: str) -> datetime:
        if not value.isascii() or not value.isdigit():
            raise ParserError(f"Invalid date '{value}'")
        try:
            return datetime.fromtimestamp(int(value) // 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ParserError(f"Date out of range '{value}'") from exc
