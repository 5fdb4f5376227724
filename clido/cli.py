# clido/cli.py
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

HELP_ARGS = ('help', '--help', '-h')


def ensure_schema():
    """Uruchamia migracje tylko wtedy, gdy tabela django_migrations jest nieaktualna."""
    from django.core.management import call_command
    from django.db import connection
    from django.db.migrations.executor import MigrationExecutor

    executor = MigrationExecutor(connection)
    targets = executor.loader.graph.leaf_nodes()
    if executor.migration_plan(targets):
        logger.info("Applying pending migrations to %s", connection.settings_dict['NAME'])
        call_command('migrate', interactive=False, verbosity=0)


def clido_commands():
    """Komendy Clido; wbudowane komendy Django (flush, shell, ...) są ukryte."""
    from django.core.management import get_commands

    return sorted(name for name, app in get_commands().items() if app == 'apps.core')


def usage(commands) -> str:
    lines = ["Usage: clido <command> [options]", "", "Available commands:"]
    lines += [f"  {name}" for name in commands]
    lines += ["", "Run 'clido help <command>' for the options of a command."]
    return "\n".join(lines) + "\n"


def main(argv=None):
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'clido.settings')

    import django
    from django.conf import settings
    from django.core.management import call_command, execute_from_command_line
    from django.db import connections

    django.setup()

    argv = list(argv or sys.argv)
    commands = clido_commands()
    subcommand = argv[1] if len(argv) > 1 else 'help'

    if subcommand in HELP_ARGS:
        if len(argv) > 2 and argv[2] in commands:
            execute_from_command_line(argv[:3])
        else:
            sys.stdout.write(usage(commands))
        return
    if subcommand not in commands and subcommand != '--version':
        sys.stderr.write(f"Unknown command: '{subcommand}'\n\n{usage(commands)}")
        sys.exit(1)

    Path(settings.DATABASES['default']['NAME']).parent.mkdir(parents=True, exist_ok=True)

    try:
        if subcommand in ('version', '--version'):
            # ManagementUtility przechwytuje 'version' i wypisuje wersję Django
            call_command('version')
            return
        ensure_schema()
        execute_from_command_line(argv)
    finally:
        # Jedno połączenie na wywołanie, zamykane na każdej ścieżce wyjścia
        connections.close_all()
