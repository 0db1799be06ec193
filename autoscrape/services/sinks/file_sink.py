"""Local file sink: writes rows to an .xlsx workbook or a .csv file."""

from __future__ import annotations

import asyncio
import csv
from pathlib import Path
from typing import TYPE_CHECKING

from openpyxl import Workbook

from autoscrape.core.logging import get_logger
from autoscrape.services.errors import SinkConfigurationError
from autoscrape.services.sinks.base import BaseSink, SinkOutcome

if TYPE_CHECKING:
    from autoscrape.services.extraction import ExtractionResult

logger = get_logger(__name__)

WORKSHEET_TITLE = "ScrapedData"


class FileSink(BaseSink):
    """Serializes rows to a tabular file, one row per extracted item.

    Columns follow the configured field order. The target directory must
    already exist.
    """

    name = "file"
    SUPPORTED_SUFFIXES = {".xlsx", ".csv"}

    def __init__(self, output_file: str | None):
        """Initialize file sink.

        Args:
            output_file: Destination path; the sink is skipped when None
        """
        self.output_file = output_file

    async def deliver(self, result: ExtractionResult) -> SinkOutcome:
        if not self.output_file:
            return self._skipped("no output file configured")
        if not result.rows:
            return self._skipped("no rows extracted")

        path = Path(self.output_file)
        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise SinkConfigurationError(
                self.name, f"unsupported output file type '{suffix or path.name}'"
            )

        if suffix == ".csv":
            await asyncio.to_thread(write_csv, path, result)
        else:
            await asyncio.to_thread(write_workbook, path, result)

        logger.info("output_file_written", path=str(path), rows=len(result.rows))
        return self._sent(len(result.rows), path=str(path))


def write_workbook(path: Path, result: ExtractionResult) -> None:
    """Write rows to a single-sheet workbook with a header row."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = WORKSHEET_TITLE
    worksheet.append(list(result.columns))
    for row in result.rows:
        worksheet.append([row.get(column, "") for column in result.columns])
    workbook.save(path)


def write_csv(path: Path, result: ExtractionResult) -> None:
    """Write rows to a UTF-8 CSV file with a header row."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(result.columns), extrasaction="ignore")
        writer.writeheader()
        for row in result.rows:
            writer.writerow(dict(row))
