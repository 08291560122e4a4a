"""
WSGI config for procurement_app project.

It exposes the WSGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

from .logging import configure_logging

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "procurement_app.settings")

configure_logging()

application = get_wsgi_application()
