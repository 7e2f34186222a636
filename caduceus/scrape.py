"""Running a complete scan and writing its output."""

from __future__ import annotations

import sys
from typing import TextIO

from caduceus.models import ScrapeArgs
from caduceus.stats import Stats
from caduceus.targets import intake
from caduceus.workers import WorkerPool, render_result


def run_scrape(args: ScrapeArgs, out: TextIO | None = None) -> Stats:
    """Probe every target described by args, print findings to out and return the tallies."""
    stream = sys.stdout if out is None else out
    stats = Stats()
    pool = WorkerPool(max(args.concurrency, 1), args.timeout)
    for result in pool.run(intake(args.ports, args.input)):
        stats.update(result)
        for line in render_result(result, args):
            print(line, file=stream, flush=True)
    if args.print_stats:
        stats.display(stream)
    return stats