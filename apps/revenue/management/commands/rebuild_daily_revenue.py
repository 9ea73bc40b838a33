import datetime as dt

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.revenue.services import rebuild


class Command(BaseCommand):
    help = "Recomputes daily revenue rows from orders for a date range (default: last 30 days)."

    def add_arguments(self, parser):
        parser.add_argument("--start", dest="start", default=None, help="YYYY-MM-DD (inclusive)")
        parser.add_argument("--end", dest="end", default=None, help="YYYY-MM-DD (inclusive); default: today")

    def handle(self, *args, **options):
        try:
            end = dt.date.fromisoformat(options["end"]) if options.get("end") else timezone.localdate()
            start = dt.date.fromisoformat(options["start"]) if options.get("start") else end - dt.timedelta(days=30)
        except ValueError:
            return self.stdout.write(self.style.ERROR("invalid date; use YYYY-MM-DD"))
        if start > end:
            return self.stdout.write(self.style.ERROR("--start must not be after --end"))
        res = rebuild(start, end)
        self.stdout.write(self.style.SUCCESS(f"OK: {res}"))
