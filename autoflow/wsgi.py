# autoflow/wsgi.py
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "autoflow.settings")

application = get_wsgi_application()

# Falha de banco ou de diretório de uploads derruba o processo aqui,
# não a cada requisição (StorageUnavailable propaga).
from vehicles.services import get_vehicle_service  # noqa: E402

get_vehicle_service().open()
