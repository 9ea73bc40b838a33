import datetime as dt
from io import StringIO

import pytest
from django.contrib.auth.hashers import check_password
from django.core.management import call_command

from apps.menu.models import MenuItem
from apps.revenue.models import DailyRevenue


@pytest.mark.django_db
def test_seed_menu_is_idempotent():
    call_command("seed_menu", stdout=StringIO())
    call_command("seed_menu", stdout=StringIO())
    assert MenuItem.objects.count() == 6
    assert MenuItem.objects.get(name="Miso Glazed Salmon").price_cents == 2499
    assert MenuItem.objects.filter(category="sweet").count() == 3


def test_hash_admin_password():
    out = StringIO()
    call_command("hash_admin_password", password="letmein", stdout=out)
    assert check_password("letmein", out.getvalue().strip())


@pytest.mark.django_db
def test_rebuild_daily_revenue(make_order):
    make_order(total_cents=1500, day=dt.date(2025, 1, 2))
    out = StringIO()
    call_command("rebuild_daily_revenue", start="2025-01-01", end="2025-01-03", stdout=out)
    assert "OK" in out.getvalue()
    assert DailyRevenue.objects.get(date=dt.date(2025, 1, 2)).amount_cents == 1500
