"""Batch normalization — one independent job per document on a thread pool."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from glyphnorm.config import settings
from glyphnorm.models.results import BatchItem, BatchReport
from glyphnorm.svg.rewriter import rewrite_document

logger = logging.getLogger(__name__)


def normalize_batch(
    documents: Iterable[tuple[str, str]],
    size: float | None = None,
    precision: int | None = None,
    max_workers: int | None = None,
    stop: threading.Event | None = None,
) -> BatchReport:
    """Normalize (name, svg_text) pairs concurrently.

    Documents share nothing, so no coordination is needed. Once `stop` is set,
    documents that have not started yet are reported as skipped. Results keep
    input order.
    """
    items = list(documents)
    size = size if size is not None else settings.glyphnorm_size
    workers = max(1, max_workers or settings.glyphnorm_workers)

    def _run(item: tuple[str, str]) -> BatchItem:
        name, svg_text = item
        if stop is not None and stop.is_set():
            return BatchItem(name=name, status="skipped")
        try:
            result = rewrite_document(svg_text, size, precision)
        except Exception as e:
            logger.exception("%s FAILED", name)
            return BatchItem(name=name, status="failed", error=str(e))
        return BatchItem(name=name, status=result.status, result=result)

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        report = BatchReport(items=list(pool.map(_run, items)))

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Batch complete: %d normalized, %d passthrough, %d skipped, %d failed, %d malformed paths in %.0fms",
        report.count("normalized"),
        report.count("passthrough"),
        report.count("skipped"),
        report.count("failed"),
        report.malformed_paths,
        elapsed,
    )
    return report
