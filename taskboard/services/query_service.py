"""Query engine: filter, sort and paginate a task set.

Filters run in a fixed order (status, priority, tags, due date range,
search) and are combined with AND. Tag matching is OR within itself and
case-insensitive.

Sorting goes through a closed mapping of sort field to extractor, never
through attribute lookup by name. Tasks with a null sort value always
come last, whatever the sort order.
"""

import functools
import logging
import math
from collections.abc import Callable, Iterable
from datetime import datetime

from pyuca import Collator

from taskboard.core.timestamps import try_parse_timestamp
from taskboard.domain.query import SortField, SortOrder, TaskQuery
from taskboard.domain.task import Task
from taskboard.models.service_models import Pagination, TaskPage


logger = logging.getLogger(__name__)

# Unicode Collation Algorithm with the default table: accents and case only break ties.
_collator = Collator()

SortValue = str | int | float | None

SORT_KEYS: dict[SortField, Callable[[Task], SortValue]] = {
    SortField.CREATED_AT: lambda task: task.created_at,
    SortField.UPDATED_AT: lambda task: task.updated_at,
    SortField.DUE_DATE: lambda task: task.due_date,
    SortField.TITLE: lambda task: task.title,
    SortField.PRIORITY: lambda task: task.priority.value,
    SortField.STATUS: lambda task: task.status.value,
}


def parse_tag_filter(tags: str | list[str] | None) -> list[str]:
    """Normalize a tag filter into a list of lower-cased, trimmed, non-empty tags."""
    if not tags:
        return []
    raw = tags.split(",") if isinstance(tags, str) else tags
    return [tag.strip().lower() for tag in raw if tag.strip()]


def _matches_tags(task: Task, wanted: set[str]) -> bool:
    return any(tag.lower() in wanted for tag in task.tags)


def _due_on_or_after(task: Task, bound: datetime) -> bool:
    due = try_parse_timestamp(task.due_date)
    return due is not None and due >= bound


def _due_on_or_before(task: Task, bound: datetime) -> bool:
    due = try_parse_timestamp(task.due_date)
    return due is not None and due <= bound


def _matches_search(task: Task, needle: str) -> bool:
    return needle in task.title.lower() or needle in task.description.lower()


def filter_tasks(tasks: Iterable[Task], query: TaskQuery) -> list[Task]:
    """Apply every filter set on ``query``; unset filters are skipped."""
    results = list(tasks)

    if query.status:
        results = [task for task in results if task.status == query.status]

    if query.priority:
        results = [task for task in results if task.priority == query.priority]

    wanted_tags = set(parse_tag_filter(query.tags))
    if wanted_tags:
        results = [task for task in results if _matches_tags(task, wanted_tags)]

    # An unparseable bound matches nothing rather than everything.
    if query.due_date_from:
        lower = try_parse_timestamp(query.due_date_from)
        results = [task for task in results if lower is not None and _due_on_or_after(task, lower)]

    if query.due_date_to:
        upper = try_parse_timestamp(query.due_date_to)
        results = [task for task in results if upper is not None and _due_on_or_before(task, upper)]

    if query.search:
        needle = query.search.lower()
        results = [task for task in results if _matches_search(task, needle)]

    return results


def _compare_values(a: SortValue, b: SortValue) -> float:
    """Ascending comparison of two non-null sort values."""
    if isinstance(a, str) and isinstance(b, str):
        key_a, key_b = _collator.sort_key(a), _collator.sort_key(b)
        return (key_a > key_b) - (key_a < key_b)
    return a - b  # type: ignore[operator]


def make_comparator(sort_by: SortField, sort_order: SortOrder) -> Callable[[Task, Task], float]:
    """Build a comparator for ``sorted`` honouring the null-last policy."""
    extract = SORT_KEYS[sort_by]
    multiplier = 1 if sort_order == SortOrder.ASC else -1

    def compare(left: Task, right: Task) -> float:
        a, b = extract(left), extract(right)
        if a is None and b is None:
            return 0
        # Nulls go last in both directions, so this is not multiplied.
        if a is None:
            return 1
        if b is None:
            return -1
        return _compare_values(a, b) * multiplier

    return compare


def sort_tasks(tasks: Iterable[Task], sort_by: SortField, sort_order: SortOrder) -> list[Task]:
    """Sort tasks; equal keys keep their input order."""
    return sorted(tasks, key=functools.cmp_to_key(make_comparator(sort_by, sort_order)))


def paginate(tasks: list[Task], *, page: int, limit: int) -> TaskPage:
    """Slice one page out of ``tasks`` and compute its metadata.

    Pages past the end return an empty slice.
    """
    total_count = len(tasks)
    total_pages = math.ceil(total_count / limit)
    start = (page - 1) * limit

    return TaskPage(
        tasks=tasks[start : start + limit],
        pagination=Pagination(
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )


def query_tasks(tasks: Iterable[Task], query: TaskQuery) -> TaskPage:
    """Filter, sort and paginate ``tasks`` according to ``query``.

    Args:
        tasks: Full record set (copies; this function does not mutate them)
        query: Filter, sort and page specification

    Returns:
        TaskPage with the requested page and pagination metadata
    """
    filtered = filter_tasks(tasks, query)
    ordered = sort_tasks(filtered, query.sort_by, query.sort_order)
    result = paginate(ordered, page=query.page, limit=query.limit)

    logger.debug(
        "Query matched %d tasks, returning page %d (%d items)",
        result.pagination.total_count,
        result.pagination.page,
        len(result.tasks),
    )
    return result
