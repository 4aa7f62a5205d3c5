"""Filtering and ordering helpers over fetched repository lists.

None of these mutate the list they are given.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from opskit.models import RepositoryDescriptor

# Months are approximated as 30 days.
DAYS_PER_MONTH = 30


def _cutoff(months: float, now: Optional[datetime]) -> datetime:
    if not math.isfinite(months):
        raise ValueError(f"Number of months must be finite, got {months}")
    now = now or datetime.now(timezone.utc)
    try:
        return now - timedelta(days=months * DAYS_PER_MONTH)
    except OverflowError:
        # window reaches past the representable calendar
        bound = datetime.min if months > 0 else datetime.max
        return bound.replace(tzinfo=timezone.utc)


def filter_by_visibility(
    repos: Sequence[RepositoryDescriptor], visibility: str
) -> List[RepositoryDescriptor]:
    """Keep repositories whose visibility matches, ignoring case."""
    wanted = visibility.lower()
    return [r for r in repos if r.visibility is not None and r.visibility.lower() == wanted]


def filter_updated_within(
    repos: Sequence[RepositoryDescriptor],
    months: float,
    now: Optional[datetime] = None,
) -> List[RepositoryDescriptor]:
    """Repositories updated at or after ``now - months``."""
    limit = _cutoff(months, now)
    return [r for r in repos if r.updated_at is not None and r.updated_at >= limit]


def filter_updated_before(
    repos: Sequence[RepositoryDescriptor],
    months: float,
    now: Optional[datetime] = None,
) -> List[RepositoryDescriptor]:
    """Repositories with an update timestamp older than ``now - months``."""
    limit = _cutoff(months, now)
    return [r for r in repos if r.updated_at is not None and r.updated_at < limit]


def sort_by_updated(
    repos: Sequence[RepositoryDescriptor], order: str = "desc"
) -> List[RepositoryDescriptor]:
    """Stable sort on update time. Entries without a timestamp go last."""
    if order not in ("asc", "desc"):
        raise ValueError(f"Sort order must be 'asc' or 'desc', got '{order}'")

    dated = [r for r in repos if r.updated_at is not None]
    undated = [r for r in repos if r.updated_at is None]
    dated = sorted(dated, key=lambda r: r.updated_at, reverse=(order == "desc"))
    return dated + undated
