"""Blame files one at a time through the TFVC annotate executable."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from tfvc_blame.configuration import resolve_client
from tfvc_blame.constants import ANNOTATE_SUBCOMMAND
from tfvc_blame.models import (
    AnnotateInvocation,
    AnnotationRecord,
    BlameOutput,
    InputFile,
    ResolvedTfvcClient,
    TfvcConfiguration,
)
from tfvc_blame.parsers import BaseParser, get_parser
from tfvc_blame.runner import ProcessRunner

logger = logging.getLogger("tfvc_blame.blame")


def annotate_last_line(records: list[AnnotationRecord], lines: int) -> list[AnnotationRecord]:
    """Extend the result to cover a trailing empty line the tool does not annotate.

    Only a shortfall of exactly one line is filled in, reusing the last record.
    Any other mismatch is returned untouched.
    """

    if records and lines == len(records) + 1:
        return [*records, records[-1]]
    return records


class TfvcBlameCommand:
    """Run the annotate tool for each file and report parsed results to a sink.

    Files are processed strictly in order. The first failure aborts the batch and
    nothing is reported for the failing file or any file after it.
    """

    def __init__(
        self,
        configuration: TfvcConfiguration | ResolvedTfvcClient,
        *,
        runner: ProcessRunner | None = None,
        parser: BaseParser | None = None,
    ) -> None:
        if isinstance(configuration, TfvcConfiguration):
            configuration = resolve_client(configuration)
        self.client = configuration
        self._runner = runner or ProcessRunner()
        self._parser = parser or get_parser(configuration.parser)

    def build_invocation(self, input_file: InputFile) -> AnnotateInvocation:
        file_path = Path(os.fspath(input_file.absolute_path))
        working_dir = self.client.working_dir
        if working_dir is None and file_path.parent.is_dir():
            # A missing directory is left for the tool to report as a missing file.
            working_dir = file_path.parent
        return AnnotateInvocation(
            executable=self.client.executable,
            arguments=(ANNOTATE_SUBCOMMAND, *self.client.config_args, str(file_path)),
            working_dir=working_dir,
            timeout_seconds=self.client.timeout_seconds,
        )

    async def blame(self, files: Iterable[InputFile], output: BlameOutput) -> None:
        files = list(files)
        logger.info("Blaming %d file(s) with %s", len(files), self.client.executable)

        for input_file in files:
            records = await self.blame_file(input_file)
            if not records:
                logger.debug("No annotations returned for %s", input_file.absolute_path)
                continue
            output.report(input_file, annotate_last_line(records, input_file.lines))

    async def blame_file(self, input_file: InputFile) -> list[AnnotationRecord]:
        """Run and parse one invocation, without the last-line adjustment."""

        invocation = self.build_invocation(input_file)
        logger.debug("Annotating %s", input_file.absolute_path)
        result = await self._runner.run(invocation)
        return self._parser.parse(result.stdout_lines, file_path=os.fspath(input_file.absolute_path))

    def blame_sync(self, files: Iterable[InputFile], output: BlameOutput) -> None:
        """Blocking entry point for hosts without an event loop."""

        asyncio.run(self.blame(files, output))
