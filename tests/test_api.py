import io
import json

import pytest
from django.contrib.auth.hashers import make_password
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image

from apps.menu.models import MenuItem
from apps.orders.models import Order
from apps.revenue.models import DailyRevenue


def _post(client, url, data, **extra):
    return client.post(url, data=json.dumps(data), content_type="application/json", **extra)


def _put(client, url, data, **extra):
    return client.put(url, data=json.dumps(data), content_type="application/json", **extra)


ORDER = {
    "email": "jane@example.com",
    "customer_name": "Jane Doe",
    "address": "42 Harbor Rd",
    "items": [{"name": "Ramen", "price": "18.99", "quantity": 2}],
}


# --- admin gate ---


@pytest.mark.django_db
def test_admin_login_issues_bearer_token(client, settings):
    settings.ADMIN_PASSWORD_HASH = make_password("letmein")
    r = _post(client, reverse("accounts:admin_login"), {"password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}

    r = _post(client, reverse("accounts:admin_login"), {"password": "letmein"})
    assert r.status_code == 200
    token = r.json()["token"]
    r = client.get(reverse("revenue:lifetime_revenue"), HTTP_AUTHORIZATION=f"Bearer {token}")
    assert r.status_code == 200


@pytest.mark.django_db
def test_admin_login_accepts_raw_bcrypt_hash(client, settings):
    import bcrypt

    settings.ADMIN_PASSWORD_HASH = bcrypt.hashpw(b"letmein", bcrypt.gensalt(rounds=4)).decode()
    r = _post(client, reverse("accounts:admin_login"), {"password": "letmein"})
    assert r.status_code == 200


@pytest.mark.django_db
def test_admin_login_is_rate_limited(client, settings):
    settings.ADMIN_PASSWORD_HASH = make_password("letmein")
    for _ in range(10):
        _post(client, reverse("accounts:admin_login"), {"password": "nope"})
    r = _post(client, reverse("accounts:admin_login"), {"password": "letmein"})
    assert r.status_code == 429
    assert r.has_header("Retry-After")


@pytest.mark.django_db
def test_admin_endpoints_reject_bad_tokens(client):
    url = reverse("revenue:daily_revenue")
    assert client.get(url).status_code == 401
    assert client.get(url, HTTP_AUTHORIZATION="Bearer forged").status_code == 401


# --- menu ---


@pytest.mark.django_db
def test_foods_listing_hides_unavailable_for_public(client, admin_client, food):
    MenuItem.objects.create(category="sweet", name="Hidden", description="x", price_cents=100, is_available=False)
    public = client.get(reverse("menu:foods")).json()
    assert [f["name"] for f in public] == [food.name]
    assert public[0]["price"] == "18.99"
    assert len(admin_client.get(reverse("menu:foods")).json()) == 2


@pytest.mark.django_db
def test_food_crud(admin_client):
    url = reverse("menu:foods")
    r = _post(admin_client, url, {"category": "dessert", "name": "Cake", "description": "Sweet", "price": "5"})
    assert r.status_code == 400
    assert r.json()["error"] == 'Category must be either "salt" or "sweet"'

    r = _post(admin_client, url, {"category": "sweet", "name": "Cake", "description": "Sweet", "price": "5"})
    assert r.status_code == 201
    food_id = r.json()["id"]
    detail = reverse("menu:food_detail", args=[food_id])

    r = _put(admin_client, detail, {"price": "6.50", "name": ""})
    assert r.status_code == 200
    assert r.json()["price"] == "6.50"
    assert r.json()["name"] == "Cake"

    r = admin_client.delete(detail)
    assert r.json() == {"message": "Food deleted successfully", "deleted": {"id": food_id, "name": "Cake"}}
    assert admin_client.get(detail).status_code == 404


@pytest.mark.django_db
@pytest.mark.parametrize("price", ["1e30", "30000000"])
def test_food_rejects_oversized_price(admin_client, price):
    r = _post(admin_client, reverse("menu:foods"), {"category": "salt", "name": "X", "description": "Y", "price": price})
    assert r.status_code == 400
    assert MenuItem.objects.count() == 0


@pytest.mark.django_db
def test_food_writes_require_admin(client, food):
    r = _post(client, reverse("menu:foods"), {"category": "salt", "name": "X", "description": "Y", "price": 1})
    assert r.status_code == 401
    assert client.delete(reverse("menu:food_detail", args=[food.id])).status_code == 401
    assert MenuItem.objects.count() == 1


@pytest.mark.django_db
def test_upload_image(admin_client):
    buf = io.BytesIO()
    Image.new("RGB", (1600, 900), (200, 80, 20)).save(buf, format="PNG")
    upload = SimpleUploadedFile("dish.png", buf.getvalue(), content_type="image/png")
    r = admin_client.post(reverse("menu:upload_image"), {"image": upload})
    assert r.status_code == 201
    assert r.json()["path"].endswith(".jpg")


@pytest.mark.django_db
def test_upload_rejects_non_images(admin_client):
    upload = SimpleUploadedFile("dish.png", b"not an image", content_type="image/png")
    r = admin_client.post(reverse("menu:upload_image"), {"image": upload})
    assert r.status_code == 400


# --- orders ---


@pytest.mark.django_db
def test_create_and_track_order(client):
    r = _post(client, reverse("orders:list"), ORDER)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Order created successfully"
    assert body["order"]["total_amount"] == "37.98"
    assert body["order"]["status"] == "Pending"
    assert body["tracking_url"] == f"/track?orderId={body['order']['id']}"

    r = client.get(reverse("orders:detail", args=[body["order"]["id"]]))
    assert r.status_code == 200
    assert r.json()["status_class"] == "pending"
    assert r.json()["progress"][0]["current"] is True


@pytest.mark.django_db
def test_create_order_validation_error(client):
    r = _post(client, reverse("orders:list"), {**ORDER, "items": []})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: email, customer_name, and items"
    assert Order.objects.count() == 0
    assert DailyRevenue.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize(
    "item",
    [
        {"name": "Ramen", "price": "1e30", "quantity": 1},
        {"name": "Ramen", "price": "10", "quantity": 10**20},
    ],
)
def test_create_order_rejects_oversized_amounts(client, item):
    r = _post(client, reverse("orders:list"), {**ORDER, "items": [item]})
    assert r.status_code == 400
    assert "error" in r.json()
    assert Order.objects.count() == 0
    assert DailyRevenue.objects.count() == 0


@pytest.mark.django_db
def test_create_order_rejects_malformed_json(client):
    r = client.post(reverse("orders:list"), data="{nope", content_type="application/json")
    assert r.status_code == 400


@pytest.mark.django_db
def test_member_order_is_linked(client, member):
    _post(client, reverse("accounts:login"), {"email": "member@example.com", "password": "secret123"})
    r = _post(client, reverse("orders:list"), ORDER)
    assert r.json()["order"]["user_id"] == str(member.id)


@pytest.mark.django_db
def test_order_listing(client, admin_client, make_order):
    make_order(email="jane@example.com")
    make_order(email="other@example.com")
    assert client.get(reverse("orders:list")).status_code == 401
    r = client.get(reverse("orders:list"), {"email": "jane@example.com"})
    assert [o["email"] for o in r.json()] == ["jane@example.com"]
    assert len(admin_client.get(reverse("orders:list")).json()) == 2


@pytest.mark.django_db
def test_unknown_order_is_404(client):
    r = client.get(reverse("orders:detail", args=["ORD-NOPE"]))
    assert r.status_code == 404
    assert r.json() == {"error": "Order not found"}


@pytest.mark.django_db
def test_status_update(client, admin_client, make_order):
    order = make_order()
    url = reverse("orders:detail", args=[order.public_code])
    assert _put(client, url, {"status": "Completed"}).status_code == 401

    r = _put(admin_client, url, {"workflow_status": "confirmed"})
    assert r.status_code == 200
    assert r.json()["status"] == "Preparing"
    assert r.json()["status_class"] == "in-progress"

    r = _put(admin_client, url, {"status": "Shipped"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid status. Must be one of: Pending, Preparing")
    order.refresh_from_db()
    assert order.status == "Preparing"


# --- reports ---


@pytest.mark.django_db
def test_daily_revenue_report(admin_client, make_order):
    import datetime as dt

    make_order(total_cents=5000, day=dt.date(2025, 1, 2))
    r = admin_client.get(reverse("revenue:daily_revenue"), {"start": "2025-01-01", "end": "2025-01-03"})
    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "calculated"
    assert [p["amount"] for p in body["data"]] == [0, 50.0, 0]
    assert body["total_revenue"] == 50.0

    r = admin_client.get(reverse("revenue:daily_revenue"), {"start": "2025-01-03", "end": "2025-01-01"})
    assert r.status_code == 400


@pytest.mark.django_db
def test_daily_revenue_chart(admin_client):
    r = admin_client.get(reverse("revenue:daily_revenue_chart"), {"start": "2025-01-01", "end": "2025-01-02"})
    assert r.status_code == 200
    assert r["Content-Type"] == "image/svg+xml"
    assert r["X-Revenue-Source"] == "calculated"
    assert r.content.count(b"<circle") == 2


@pytest.mark.django_db
def test_lifetime_report(admin_client, make_order):
    make_order(total_cents=2000, status="Completed")
    make_order(total_cents=3000, status="Cancelled")
    body = admin_client.get(reverse("revenue:lifetime_revenue")).json()
    assert body["total_revenue"] == 20.0
    assert body["revenue_by_status"]["Cancelled"] == 30.0


def test_healthz(client):
    assert client.get("/healthz").content == b"ok"
