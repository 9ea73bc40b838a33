import datetime as dt

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches
from django.test import Client
from django.utils import timezone

from apps.accounts.tokens import make_admin_token
from apps.menu.models import MenuItem
from apps.orders.models import Order
from apps.orders.status import PENDING


@pytest.fixture(autouse=True)
def _clear_cache():
    caches["default"].clear()
    yield
    caches["default"].clear()


@pytest.fixture
def admin_token():
    return make_admin_token()


@pytest.fixture
def admin_client(db, admin_token):
    return Client(HTTP_AUTHORIZATION=f"Bearer {admin_token}")


@pytest.fixture
def member(db):
    User = get_user_model()
    user = User(username="u_member", email="member@example.com", name="Mia Member")
    user.set_password("secret123")
    user.save()
    return user


@pytest.fixture
def food(db):
    return MenuItem.objects.create(
        category="salt",
        name="Signature Salt Ramen",
        description="Tonkotsu broth",
        price_cents=1899,
    )


@pytest.fixture
def make_order(db):
    """Insert an order directly (no ledger or email side effects), optionally backdated."""
    counter = {"n": 0}

    def _make(total_cents=1000, status=PENDING, day=None, email="cust@example.com", **extra):
        counter["n"] += 1
        order = Order.objects.create(
            public_code=f"ORD-TEST-{counter['n']:04d}",
            email=email,
            customer_name=extra.pop("customer_name", "Test Customer"),
            address=extra.pop("address", "1 Main St"),
            items_json=extra.pop("items_json", [{"name": "Dish", "price": f"{total_cents / 100:.2f}", "quantity": 1}]),
            status=status,
            total_cents=total_cents,
            **extra,
        )
        if day is not None:
            when = timezone.make_aware(dt.datetime.combine(day, dt.time(12, 0)))
            Order.objects.filter(pk=order.pk).update(created_at=when)
            order.refresh_from_db()
        return order

    return _make
