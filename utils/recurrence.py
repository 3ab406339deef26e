# utils/recurrence.py
import logging
from datetime import date
from typing import Iterator

from models.task import Task
from utils.dates import add_calendar_unit

logger = logging.getLogger(__name__)

# How many future occurrences a single projection may generate.
DEFAULT_PROJECTION_LIMIT = 50


def next_occurrence(task: Task) -> date:
    """Due date of the occurrence that follows ``task``.

    Only meaningful for BAU tasks that carry a frequency.
    """
    return add_calendar_unit(task.due_date, task.frequency)


def project_future_occurrences(task: Task, window_start: date, window_end: date,
                               max_iterations: int = DEFAULT_PROJECTION_LIMIT) -> Iterator[date]:
    """Lazily yield the future due dates of ``task`` inside the window.

    Every generated occurrence counts toward ``max_iterations``, including the
    ones before ``window_start``. Generation stops at the first date past
    ``window_end`` or once the cap is reached.
    """
    current = next_occurrence(task)
    for _ in range(max_iterations):
        if current > window_end:
            return
        if current >= window_start:
            yield current
        current = add_calendar_unit(current, task.frequency)
    logger.debug("Projection cap of %d reached for task %s", max_iterations, task.id)
