# hostel/filters.py
"""
Client-side table filters. They run over rows that were already fetched and
never hit the backend; each criterion is independent, so the order they are
applied in does not matter.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

# Select boxes use these labels for "no filter"
NO_FILTER = ("", "all", "all status", "all types")


def is_unset(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in NO_FILTER


def matches_term(term: Optional[str], *fields: Optional[str]) -> bool:
    if term is None or not term.strip():
        return True
    needle = term.strip().lower()
    return any(needle in (f or "").lower() for f in fields)


def matches_exact(wanted: Optional[str], value: Optional[str]) -> bool:
    if is_unset(wanted):
        return True
    return (value or "") == wanted


def apply(rows: Iterable[T], *predicates: Callable[[T], bool]) -> List[T]:
    return [r for r in rows if all(p(r) for p in predicates)]


def by_term(term: Optional[str], fields: Callable[[T], Sequence[Optional[str]]]) -> Callable[[T], bool]:
    return lambda row: matches_term(term, *fields(row))


def by_exact(wanted: Optional[str], value: Callable[[T], Optional[str]]) -> Callable[[T], bool]:
    return lambda row: matches_exact(wanted, value(row))
