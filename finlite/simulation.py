"""Concurrent reader/writer load against the expense collection.

One writer inserts expenses one at a time while several readers take
full snapshots of the collection. The simulation adds no locking of its
own; it relies on the store serializing writers and giving readers a
consistent snapshot.
"""

import logging
import random
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import date

from finlite.domain.models import CategoryName, Description, Money
from finlite.domain.records import Expense
from finlite.store.collections import ExpenseCollection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Counts observed during a simulation run."""

    initial_count: int
    final_count: int
    inserted: int
    reader_counts: dict[int, list[int]]

    @property
    def readers_monotonic(self) -> bool:
        """True if no reader ever saw the collection shrink."""
        return all(is_non_decreasing(counts) for counts in self.reader_counts.values())


def is_non_decreasing(counts: list[int]) -> bool:
    """Check that each count is at least the one before it."""
    return all(a <= b for a, b in zip(counts, counts[1:]))


def writer_expense(index: int, today: date, rng: random.Random) -> Expense:
    """Expense inserted by the writer on its ``index``-th step (0-based)."""
    return Expense(
        date=today,
        amount=Money(rng.randrange(50, 500) * 100),
        category=CategoryName("Food"),
        description=Description(f"Lunch {index + 1}"),
    )


def run_simulation(
    collection: ExpenseCollection,
    writes: int = 5,
    readers: int = 2,
    reads_per_reader: int = 3,
    write_delay: float = 0.1,
    read_delay: float = 0.15,
    on_event: Callable[[str], None] | None = None,
    rng: random.Random | None = None,
) -> SimulationResult:
    """Run one writer and ``readers`` readers concurrently and wait for all.

    Args:
        collection: Expense collection to load.
        writes: Number of sequential inserts by the writer.
        readers: Number of concurrent readers.
        reads_per_reader: Full-collection reads per reader.
        write_delay: Pause after each insert, in seconds.
        read_delay: Pause after each read, in seconds.
        on_event: Called with a progress message (e.g. "Reader 1 read 30 expenses.").
        rng: Random source for writer amounts.

    Returns:
        SimulationResult with before/after counts and each reader's counts.

    Raises:
        StorageError: If any worker hits a storage failure. All workers
            still run to completion first.
    """
    rng = rng or random.Random()
    notify = on_event or (lambda message: None)
    today = date.today()
    initial_count = collection.count()
    reader_counts: dict[int, list[int]] = {reader_id: [] for reader_id in range(1, readers + 1)}

    def writer() -> int:
        for i in range(writes):
            collection.insert(writer_expense(i, today, rng))
            logger.debug("writer inserted expense %d/%d", i + 1, writes)
            time.sleep(write_delay)
        notify("Writer task completed.")
        return writes

    def reader(reader_id: int) -> None:
        for _ in range(reads_per_reader):
            count = len(collection.find_all())
            reader_counts[reader_id].append(count)
            logger.debug("reader %d saw %d expenses", reader_id, count)
            notify(f"Reader {reader_id} read {count} expenses.")
            time.sleep(read_delay)

    with ThreadPoolExecutor(max_workers=readers + 1, thread_name_prefix="finlite-sim") as pool:
        futures = [pool.submit(writer)]
        futures.extend(pool.submit(reader, reader_id) for reader_id in reader_counts)
        wait(futures)

    # Re-raise the first worker failure, if any
    for future in futures:
        future.result()

    notify("Concurrency simulation completed.")
    return SimulationResult(
        initial_count=initial_count,
        final_count=collection.count(),
        inserted=writes,
        reader_counts=reader_counts,
    )
