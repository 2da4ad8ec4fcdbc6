"""
WSGI config for hospital project.

It exposes the WSGI callable as a module-level variable named ``application``
for gunicorn, uWSGI or any other WSGI server.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

application = get_wsgi_application()
