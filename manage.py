#!/usr/bin/env python
"""Django's command-line utility for administrative tasks."""
import os
import sys


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "procurement_app.settings")
    from django.core.management import execute_from_command_line

    from procurement_app.logging import configure_logging

    configure_logging()

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
