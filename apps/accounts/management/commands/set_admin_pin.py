"""
Management command to create the POS admin or rotate its PIN.

Usage:
    python manage.py set_admin_pin 123456
    python manage.py set_admin_pin 123456 --name owner
"""

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import set_admin_pin, InvalidPinError


class Command(BaseCommand):
    help = 'Create the POS admin or change its PIN'

    def add_arguments(self, parser):
        parser.add_argument('pin', help='Numeric PIN, at least 4 digits')
        parser.add_argument(
            '--name',
            default='admin',
            help='Admin name (default: admin)',
        )

    def handle(self, *args, **options):
        try:
            admin = set_admin_pin(pin=options['pin'], name=options['name'])
        except InvalidPinError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f'PIN set for {admin.name}'))
