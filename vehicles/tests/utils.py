import shutil
import tempfile

from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

VIN = "1HGCM82633A004352"
MB = 1024 * 1024


def vehicle_fields(**overrides):
    """Campos mínimos válidos (cenário A: Toyota Corolla 2023)."""
    fields = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2023,
        "vin": VIN,
        "price": 15000,
        "mileage": 50000,
        "status": "Disponible",
        "transmission": "Manual",
    }
    fields.update(overrides)
    return fields


def image_file(name="foto.jpg", size=1024, content_type="image/jpeg"):
    return SimpleUploadedFile(name, b"\xff" * size, content_type=content_type)


class TempMediaMixin:
    """
    Cada teste ganha um MEDIA_ROOT próprio em diretório temporário
    (removido ao final) e um cache limpo.
    """

    def setUp(self):
        super().setUp()
        self.media_root = tempfile.mkdtemp(prefix="autoflow-media-")
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        media = override_settings(MEDIA_ROOT=self.media_root)
        media.enable()
        self.addCleanup(media.disable)
        cache.clear()
        self.addCleanup(cache.clear)
