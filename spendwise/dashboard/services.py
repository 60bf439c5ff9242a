"""Budget and spending summary shown on the dashboard."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, TypedDict

from spendwise.core.constants import (
    BUDGET_HALF_PERCENT,
    BUDGET_WARNING_PERCENT,
    CURRENCY_SYMBOL,
    DAILY_SPENDING_DAYS,
    DEFAULT_MONTHLY_BUDGET,
    RECENT_TRANSACTIONS_LIMIT,
)
from spendwise.transactions.services import get_user_transactions
from spendwise.user.services.core import get_user_by_id

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class DailyTotal(TypedDict):
    date: str
    total: float


class DashboardSummary(TypedDict):
    budget: float
    spent: float
    remaining: float
    over_budget: bool
    progress: float
    progress_capped: float
    status: str
    status_text: str
    daily_spending: list[DailyTotal]
    recent_transactions: list[dict[str, Any]]


def format_currency(amount: float) -> str:
    """Format an amount with the currency symbol and thousands separators."""
    text = f"{amount:,.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    return f"{CURRENCY_SYMBOL}{text}"


def _as_date(value: Any) -> datetime.date | None:
    """Coerce a Firestore timestamp, datetime, date or ISO string to a date."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.datetime.fromisoformat(value).date()
        except ValueError:
            return None
    return None


def budget_status(progress: float, spent: float, budget: float) -> tuple[str, str]:
    """Return the status level and message for the spending progress."""
    if progress > 100:  # noqa: PLR2004
        return "over", f"You're over budget by {format_currency(spent - budget)}."
    if progress > BUDGET_WARNING_PERCENT:
        return "warning", "Warning: You're nearing your budget limit."
    if progress > BUDGET_HALF_PERCENT:
        return "half", "You've spent over half of your budget."
    return "on_track", "You're on track with your spending."


def _month_bounds(today: datetime.date) -> tuple[datetime.date, datetime.date]:
    first_day = today.replace(day=1)
    next_month = (first_day + datetime.timedelta(days=32)).replace(day=1)
    return first_day, next_month - datetime.timedelta(days=1)


def build_dashboard_summary(
    transactions: list[dict[str, Any]],
    budget: float | None,
    today: datetime.date,
    categories: list[dict[str, Any]] | None = None,
    default_budget: float = DEFAULT_MONTHLY_BUDGET,
) -> DashboardSummary:
    """Summarize a user's transactions against their budget.

    Transactions are expected newest first. Negative amounts are refunds:
    they reduce this month's net spend but never count as daily spending
    or recent expenses.
    """
    budget = budget or default_budget
    first_day, last_day = _month_bounds(today)

    spent = 0.0
    for t in transactions:
        day = _as_date(t.get("date"))
        if day and first_day <= day <= last_day:
            spent += t.get("amount", 0)

    remaining = budget - spent
    progress = (spent / budget) * 100 if budget > 0 else 0
    status, status_text = budget_status(progress, spent, budget)

    days = [
        today - datetime.timedelta(days=i) for i in range(DAILY_SPENDING_DAYS - 1, -1, -1)
    ]
    daily = {day: 0.0 for day in days}
    expenses = [t for t in transactions if t.get("amount", 0) > 0]
    for t in expenses:
        day = _as_date(t.get("date"))
        if day in daily:
            daily[day] += t["amount"]

    colors = {c.get("name"): c.get("color") for c in categories or []}
    recent = [
        {**t, "categoryColor": colors.get(t.get("category"))}
        for t in expenses[:RECENT_TRANSACTIONS_LIMIT]
    ]

    return {
        "budget": budget,
        "spent": spent,
        "remaining": remaining,
        "over_budget": remaining < 0,
        "progress": progress,
        "progress_capped": min(progress, 100),
        "status": status,
        "status_text": status_text,
        "daily_spending": [
            {"date": day.strftime("%d"), "total": total} for day, total in daily.items()
        ],
        "recent_transactions": recent,
    }


def get_dashboard_data(
    db: Client,
    user_id: str,
    today: datetime.date | None = None,
    default_budget: float = DEFAULT_MONTHLY_BUDGET,
) -> DashboardSummary | None:
    """Load a user's budget and transactions and summarize them."""
    user = get_user_by_id(db, user_id)
    if user is None:
        return None
    return build_dashboard_summary(
        get_user_transactions(db, user_id),
        user.get("budget"),
        today or datetime.date.today(),
        categories=user.get("categories"),
        default_budget=default_budget,
    )
