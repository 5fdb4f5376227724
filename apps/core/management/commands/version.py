import platform

from django.core.management.base import BaseCommand

import clido


class Command(BaseCommand):
    help = 'Print the version number of Clido'
    requires_system_checks = []

    def handle(self, *args, **options):
        self.stdout.write(f"Clido version {clido.__version__}")
        self.stdout.write(f"Python version: {platform.python_version()}")
        self.stdout.write(f"OS/Arch: {platform.system().lower()}/{platform.machine()}")
