#!/usr/bin/env python
"""Run the social service locally against an externally managed schema."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start the development server with the runlocal command.

    The follows, notifications and profiles tables belong to the shared
    athlete database, so runlocal skips the unapplied migration check and
    the service still starts (readiness reports degraded) when the
    database is unreachable.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "athlete_network.settings")
    execute_from_command_line([sys.argv[0], "runlocal"])


if __name__ == "__main__":
    main()
