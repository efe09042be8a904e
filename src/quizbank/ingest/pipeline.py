"""
Drives fetched pages through the writer and keeps the run totals.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..opentdb.fetcher import BatchFetcher
from .writer import DeduplicatingWriter

logger = logging.getLogger(__name__)


@dataclass
class IngestReport:
    pages: int = 0
    inserted: int = 0
    skipped: int = 0
    stop_reason: Optional[str] = None

    @property
    def fetched(self) -> int:
        return self.inserted + self.skipped


def ingest_questions(fetcher: BatchFetcher, writer: DeduplicatingWriter, base_query: str,
                     page_size: Optional[int] = None) -> IngestReport:
    """
    Fetch every page for ``base_query`` and write each question in order.

    A page is fully written before the next one is requested. Errors from
    either side propagate unchanged; the totals logged so far stand.
    """
    report = IngestReport()

    for page in fetcher.iter_pages(base_query, page_size):
        report.pages += 1
        page_inserted = 0
        for raw in page:
            result = writer.write_question(raw)
            if result.was_inserted:
                report.inserted += 1
                page_inserted += 1
            else:
                report.skipped += 1

        logger.info(
            f"Page {report.pages}: {page_inserted} inserted, {len(page) - page_inserted} skipped "
            f"(total inserted {report.inserted}, skipped {report.skipped})"
        )

    report.stop_reason = fetcher.stop_reason
    logger.info(f"Done. Inserted: {report.inserted}, Skipped (duplicates): {report.skipped}")
    return report
