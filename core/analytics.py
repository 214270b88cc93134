# core/analytics.py

"""
Dashboard counters and the analytics breakdowns.

Callers pass complaints that are already region-filtered; nothing here
looks at roles.
"""

from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from models.complaint import Complaint
from models.enums import ComplaintCategory, ComplaintPriority, ComplaintStatus, Region


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def sort_recent_first(complaints: Iterable[Complaint]) -> List[Complaint]:
    """Newest `created_at` first; rows with unparseable dates sink to the end."""
    return sorted(
        complaints,
        key=lambda c: c.created or datetime.min,
        reverse=True,
    )


def dashboard_stats(complaints: List[Complaint], scope: str) -> dict:
    statuses = Counter(c.status for c in complaints)
    priorities = Counter(c.priority for c in complaints)
    return {
        "scope": scope,
        "total": len(complaints),
        "open": statuses[ComplaintStatus.open.value],
        "in_progress": statuses[ComplaintStatus.in_progress.value],
        "resolved": statuses[ComplaintStatus.resolved.value],
        "closed": statuses[ComplaintStatus.closed.value],
        "cancelled": statuses[ComplaintStatus.cancelled.value],
        "critical": priorities[ComplaintPriority.critical.value],
        "high_priority": priorities[ComplaintPriority.high.value],
    }


def region_breakdown(complaints: List[Complaint]) -> List[dict]:
    # Enumeration order, regions with no complaints omitted
    rows = []
    for region in Region:
        in_region = [c for c in complaints if c.region == region.value]
        if not in_region:
            continue
        rows.append({
            "region": region.value,
            "total": len(in_region),
            "open": sum(1 for c in in_region if c.status == ComplaintStatus.open.value),
            "resolved": sum(1 for c in in_region if c.status == ComplaintStatus.resolved.value),
        })
    return rows


def category_breakdown(complaints: List[Complaint]) -> List[dict]:
    total = len(complaints)
    counts = Counter(c.category for c in complaints)
    rows = [
        {
            "category": category.value,
            "count": counts[category.value],
            "percentage": _percent(counts[category.value], total),
        }
        for category in ComplaintCategory
        if counts[category.value]
    ]
    # Stable: ties keep enumeration order
    rows.sort(key=lambda r: r["count"], reverse=True)
    return rows


def analytics_report(complaints: List[Complaint], now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    total = len(complaints)
    resolved = sum(1 for c in complaints if c.status == ComplaintStatus.resolved.value)
    critical = sum(1 for c in complaints if c.priority == ComplaintPriority.critical.value)
    week_ago = now - timedelta(days=7)

    return {
        "total": total,
        "open": sum(1 for c in complaints if c.status == ComplaintStatus.open.value),
        "in_progress": sum(1 for c in complaints if c.status == ComplaintStatus.in_progress.value),
        "resolved": resolved,
        "critical": critical,
        "resolution_rate": _percent(resolved, total),
        "critical_rate": _percent(critical, total),
        "this_week": sum(1 for c in complaints if c.created and c.created > week_ago),
        "regions": region_breakdown(complaints),
        "categories": category_breakdown(complaints),
    }
