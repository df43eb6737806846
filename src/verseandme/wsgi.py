"""WSGI config for the Verse & Me storefront."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "verseandme.settings.prod")

application = get_wsgi_application()
