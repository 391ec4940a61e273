"""
Management command to delete expired and used one-time passwords.

Usage:
    python manage.py purge_expired_otps
    python manage.py purge_expired_otps --dry-run
"""

from django.core.management.base import BaseCommand

from stockmaster.models import OneTimePassword


class Command(BaseCommand):
    """Purge expired OTPs command."""

    help = 'Delete expired or already used one-time passwords'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many codes would be deleted without deleting them',
        )

    def handle(self, *args, **options):
        stale = OneTimePassword.objects.expired() | OneTimePassword.objects.filter(is_used=True)

        if options['dry_run']:
            self.stdout.write(f'{stale.count()} one-time password(s) would be deleted')
            return

        count, _ = stale.delete()
        self.stdout.write(self.style.SUCCESS(f'{count} one-time password(s) deleted'))
