# config/wsgi.py

import os
from django.core.wsgi import get_wsgi_application

# Configurar settings padrão
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

# Apenas HTTP (REST, upload e admin) - o canal /ws/tasks/ exige o config.asgi
application = get_wsgi_application()
