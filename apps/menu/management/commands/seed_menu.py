from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menu.models import MenuItem


SEED_ITEMS = [
    {
        "category": "salt",
        "name": "Signature Salt Ramen",
        "description": "Rich tonkotsu broth with fresh noodles, chashu pork, and seasonal vegetables",
        "image_url": "https://images.unsplash.com/photo-1569718212165-3a8278d5f624?w=800&h=600&fit=crop",
        "price_cents": 1899,
    },
    {
        "category": "salt",
        "name": "Miso Glazed Salmon",
        "description": "Fresh salmon glazed with house-made miso sauce, served with steamed rice",
        "image_url": "https://images.unsplash.com/photo-1467003909585-2f8a72700288?w=800&h=600&fit=crop",
        "price_cents": 2499,
    },
    {
        "category": "salt",
        "name": "Vegetable Curry Bowl",
        "description": "Aromatic curry with seasonal vegetables and jasmine rice",
        "image_url": "https://images.unsplash.com/photo-1455619452474-d2be8b1e70cd?w=800&h=600&fit=crop",
        "price_cents": 1699,
    },
    {
        "category": "sweet",
        "name": "Matcha Cheesecake",
        "description": "Creamy cheesecake infused with premium matcha powder",
        "image_url": "https://images.unsplash.com/photo-1578985545062-69928b1d9587?w=800&h=600&fit=crop",
        "price_cents": 1299,
    },
    {
        "category": "sweet",
        "name": "Mochi Ice Cream",
        "description": "Traditional mochi filled with artisanal ice cream flavors",
        "image_url": "https://images.unsplash.com/photo-1563805042-7684c019e1cb?w=800&h=600&fit=crop",
        "price_cents": 899,
    },
    {
        "category": "sweet",
        "name": "Dorayaki Pancakes",
        "description": "Fluffy pancakes filled with sweet red bean paste",
        "image_url": "https://images.unsplash.com/photo-1506084868230-bb9d95c24759?w=800&h=600&fit=crop",
        "price_cents": 1099,
    },
]


class Command(BaseCommand):
    help = "Seeds the menu with the house dishes (skips names that already exist)."

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for attrs in SEED_ITEMS:
            _item, was_created = MenuItem.objects.get_or_create(name=attrs["name"], defaults=attrs)
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f"OK: {created} created, {len(SEED_ITEMS) - created} already present"))
