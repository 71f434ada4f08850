"""Report aggregations over a full set of logs."""

import logging

from app.schemas.logs import LogRecord

logger = logging.getLogger(__name__)


def top_categories(logs: list[LogRecord], limit: int = 3) -> list[dict]:
    """
    Sum calories per category and return the largest totals.

    Amounts are summed regardless of intake/burn type. Categories with equal
    totals keep the order in which they first appear in the input.

    Returns:
        Up to `limit` dicts of {category, total_calories}, largest first.
    """
    totals: dict[str, float] = {}
    for log in logs:
        totals[log.category] = totals.get(log.category, 0) + log.amount

    result = [
        {"category": category, "total_calories": total}
        for category, total in totals.items()
    ]
    result.sort(key=lambda r: r["total_calories"], reverse=True)

    logger.debug(f"Computed totals for {len(totals)} categories from {len(logs)} logs")
    return result[:limit]


def monthly_net(logs: list[LogRecord]) -> list[dict]:
    """
    Net calories per month: intake adds, anything else subtracts.

    The month key is the "YYYY-MM" prefix of each log's date. All months are
    returned, sorted by net total descending; ties keep first-seen order.
    """
    totals: dict[str, float] = {}
    for log in logs:
        month = log.date[:7]
        amount = log.amount if log.kind == "intake" else -log.amount
        totals[month] = totals.get(month, 0) + amount

    result = [
        {"month": month, "total_calories": total}
        for month, total in totals.items()
    ]
    result.sort(key=lambda r: r["total_calories"], reverse=True)
    return result
