"""WSGI config for the formsite project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "formsite.settings")

application = get_wsgi_application()
