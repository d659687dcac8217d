"""Runserver variant for local development against an external schema.

The social tables are owned by the platform database, so the server starts
without checking migrations and can come up in degraded mode.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """Runserver that skips migration checks."""

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks; this service does not own the schema."""
        self.stdout.write(
            self.style.WARNING(
                "Skipping migration checks (service does not own database schema)"
            )
        )
