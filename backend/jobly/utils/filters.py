"""
In-memory filtering for company and job search results.

Filters are a sparse mapping of option name -> parameter. Only options that
are present and truthy narrow the results; unknown options are ignored so
new query parameters can be added without breaking older callers.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
Predicate = Callable[[Record], bool]

COMPANY_FILTERS = ("minEmployees", "maxEmployees", "nameLike")
JOB_FILTERS = ("title", "minSalary", "hasEquity")


def _at_least(field: str, floor) -> Predicate:
    def check(record: Record) -> bool:
        value = record.get(field)
        return value is not None and value >= floor
    return check


def _at_most(field: str, ceiling) -> Predicate:
    def check(record: Record) -> bool:
        value = record.get(field)
        return value is not None and value <= ceiling
    return check


def _contains(field: str, needle) -> Predicate:
    needle = str(needle).lower()

    def check(record: Record) -> bool:
        value = record.get(field)
        return isinstance(value, str) and needle in value.lower()
    return check


def _has_equity(_flag) -> Predicate:
    def check(record: Record) -> bool:
        equity = record.get("equity")
        if not equity:
            return False
        try:
            return float(equity) > 0
        except (TypeError, ValueError):
            return False
    return check


# option name -> factory taking the option's parameter
PREDICATES: dict[str, Callable[[Any], Predicate]] = {
    "minEmployees": lambda v: _at_least("numEmployees", v),
    "maxEmployees": lambda v: _at_most("numEmployees", v),
    "nameLike": lambda v: _contains("name", v),
    "title": lambda v: _contains("title", v),
    "minSalary": lambda v: _at_least("salary", v),
    "hasEquity": _has_equity,
}


def active_predicates(filters: Mapping[str, Any] | None) -> list[Predicate]:
    if not filters:
        return []
    return [factory(filters[name]) for name, factory in PREDICATES.items() if filters.get(name)]


def filter_results(records: Iterable[Record], filters: Mapping[str, Any] | None = None) -> list[Record]:
    """Return the records that satisfy every active filter, in their original order."""
    results = list(records)
    for predicate in active_predicates(filters):
        results = [r for r in results if predicate(r)]
    return results


def _restrict(filters: Mapping[str, Any] | None, allowed: Sequence[str]) -> dict[str, Any]:
    if not filters:
        return {}
    return {k: v for k, v in filters.items() if k in allowed}


def filter_companies(records: Iterable[Record], filters: Mapping[str, Any] | None = None) -> list[Record]:
    applied = _restrict(filters, COMPANY_FILTERS)
    logger.debug("Filtering companies with %s", applied)
    return filter_results(records, applied)


def filter_jobs(records: Iterable[Record], filters: Mapping[str, Any] | None = None) -> list[Record]:
    applied = _restrict(filters, JOB_FILTERS)
    logger.debug("Filtering jobs with %s", applied)
    return filter_results(records, applied)
