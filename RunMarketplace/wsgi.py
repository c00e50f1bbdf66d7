"""
WSGI config for RunMarketplace project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'RunMarketplace.settings')

application = get_wsgi_application()
