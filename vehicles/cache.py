# vehicles/cache.py
import logging

from django.core.cache import cache

logger = logging.getLogger(__name__)

# Chaves das views de leitura que dependem do inventário
INVENTORY_VIEW = "inventory"
REPORTS_VIEW = "reports"


def vehicle_view_key(vehicle_id: int) -> str:
    return f"vehicle:{vehicle_id}"


class CacheInvalidator:
    """
    Marca views de leitura como obsoletas após cada mutação bem-sucedida.
    Quem lê (ex.: relatórios) guarda o resultado no cache com a mesma chave.
    """

    def __init__(self, backend=None):
        self.backend = backend or cache

    def invalidate(self, view_key: str) -> None:
        self.backend.delete(view_key)
        logger.debug("View invalidada: %s", view_key)
