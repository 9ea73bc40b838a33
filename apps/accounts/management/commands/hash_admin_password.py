from getpass import getpass

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Prints a hash for the shared admin password, for ADMIN_PASSWORD_HASH."

    def add_arguments(self, parser):
        parser.add_argument("--password", dest="password", default=None, help="Password (prompted when omitted)")

    def handle(self, *args, **options):
        password = options.get("password") or getpass("Admin password: ")
        if not password:
            raise CommandError("empty password")
        self.stdout.write(make_password(password))
