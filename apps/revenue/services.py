from __future__ import annotations

import datetime as dt
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, F, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.common import errors
from apps.common.money import cents_float
from apps.orders.models import Order
from apps.orders.status import CANCELLED
from .models import DailyRevenue

logger = logging.getLogger(__name__)

SOURCE_AGGREGATED = "aggregated"
SOURCE_CALCULATED = "calculated"


def _increment(day: dt.date, amount_cents: int, count: int) -> int:
    return DailyRevenue.objects.filter(date=day).update(
        amount_cents=F("amount_cents") + amount_cents,
        order_count=F("order_count") + count,
        updated_at=timezone.now(),
    )


@transaction.atomic
def add_to_day(day: dt.date, amount_cents: int, count: int = 1) -> None:
    """Insert-or-increment the ledger row for `day` without read-modify-write."""
    if _increment(day, amount_cents, count):
        return
    try:
        with transaction.atomic():
            DailyRevenue.objects.create(date=day, amount_cents=amount_cents, order_count=count)
    except IntegrityError:
        # another request created the row first
        _increment(day, amount_cents, count)


def record_order(order: Order, day: dt.date | None = None) -> bool:
    """Best-effort ledger upsert for a freshly created order. Never raises."""
    if day is None:
        day = timezone.localdate(order.created_at) if order.created_at else timezone.localdate()
    try:
        add_to_day(day, int(order.total_cents), 1)
    except Exception:
        logger.exception("Failed to update daily revenue for order %s", order.public_code)
        return False
    return True


def parse_range(start: str | None, end: str | None, *, today: dt.date | None = None) -> tuple[dt.date, dt.date]:
    today = today or timezone.localdate()
    window = int(getattr(settings, "DEFAULT_REVENUE_WINDOW_DAYS", 30))

    def _parse(raw, default: dt.date, label: str) -> dt.date:
        if not raw:
            return default
        try:
            value = parse_date(str(raw))
        except ValueError:
            value = None
        if value is None:
            raise errors.ValidationError(f"Invalid {label} date; use YYYY-MM-DD")
        return value

    start_date = _parse(start, today - dt.timedelta(days=window), "start")
    end_date = _parse(end, today, "end")
    if start_date > end_date:
        raise errors.ValidationError("start must not be after end")
    max_days = int(getattr(settings, "REVENUE_MAX_RANGE_DAYS", 366))
    if (end_date - start_date).days + 1 > max_days:
        raise errors.ValidationError(f"Range too long (max {max_days} days)")
    return start_date, end_date


def _dense(start: dt.date, end: dt.date, by_day: dict[dt.date, int]) -> list[dict]:
    out = []
    day = start
    while day <= end:
        out.append({"date": day.isoformat(), "amount": cents_float(by_day.get(day, 0))})
        day += dt.timedelta(days=1)
    return out


def _orders_by_day(start: dt.date, end: dt.date) -> dict[dt.date, int]:
    rows = (
        Order.objects.filter(created_at__date__gte=start, created_at__date__lte=end)
        .exclude(status=CANCELLED)
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(total=Sum("total_cents"))
        .order_by("day")
    )
    return {row["day"]: int(row["total"] or 0) for row in rows}


def daily_revenue(start: dt.date, end: dt.date) -> dict:
    """Dense, date-ascending series for [start, end].

    Reads the ledger; when it holds nothing for the span, recomputes from
    orders (cancelled ones excluded). Missing days are zero-filled.
    """
    ledger = {row.date: row.amount_cents for row in DailyRevenue.objects.filter(date__gte=start, date__lte=end)}
    if ledger:
        by_day, source = ledger, SOURCE_AGGREGATED
    else:
        by_day, source = _orders_by_day(start, end), SOURCE_CALCULATED
    data = _dense(start, end, by_day)
    return {
        "data": data,
        "total_days": len(data),
        "total_revenue": cents_float(sum(by_day.values())),
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "source": source,
    }


def lifetime_revenue() -> dict:
    """Net totals exclude cancelled orders; the per-status breakdown covers every order."""
    agg = Order.objects.exclude(status=CANCELLED).aggregate(total=Sum("total_cents"), n=Count("id"))
    total_cents = int(agg["total"] or 0)
    total_orders = int(agg["n"] or 0)
    average = (total_cents / total_orders) if total_orders else 0
    by_status = {
        row["status"]: cents_float(row["total"])
        for row in Order.objects.order_by().values("status").annotate(total=Sum("total_cents"))
    }
    return {
        "total_revenue": cents_float(total_cents),
        "total_orders": total_orders,
        "average_order_value": round(average / 100.0, 2),
        "revenue_by_status": by_status,
        "calculated_at": timezone.now().isoformat(),
    }


@transaction.atomic
def rebuild(start: dt.date, end: dt.date) -> dict:
    """Recompute ledger rows for [start, end] from orders, gross (cancelled included)."""
    rows = (
        Order.objects.filter(created_at__date__gte=start, created_at__date__lte=end)
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(total=Sum("total_cents"), n=Count("id"))
        .order_by("day")
    )
    deleted, _ = DailyRevenue.objects.filter(date__gte=start, date__lte=end).delete()
    written = 0
    for row in rows:
        DailyRevenue.objects.create(date=row["day"], amount_cents=int(row["total"] or 0), order_count=int(row["n"]))
        written += 1
    logger.info("Rebuilt daily revenue %s..%s: %s rows (%s replaced)", start, end, written, deleted)
    return {"rows": written, "replaced": deleted, "period": f"{start}..{end}"}
