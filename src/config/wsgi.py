"""WSGI entry point.

Run ``python manage.py bootstrap_store`` once before serving to connect
to the database and apply the schema.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
