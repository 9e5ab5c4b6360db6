# vehicles/assets.py
import logging
import os
import secrets
import tempfile
from pathlib import PurePosixPath
from typing import Optional

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from django.utils import timezone
from django.utils.text import slugify

from .exceptions import AssetWriteError, StorageUnavailable

logger = logging.getLogger(__name__)


class AssetStore:
    """
    Repositório de imagens de veículos em disco.

    Os arquivos ficam em <MEDIA_ROOT>/vehicles/ e são referenciados pelo
    registro só via URL relativa (/uploads/vehicles/<nome>). O nome não tem
    relação com o id do veículo: carimbo de tempo + sufixo aleatório + nome
    original saneado.
    """

    def __init__(self, location: str, base_url: str):
        self.location = os.path.abspath(location)
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.storage = FileSystemStorage(location=self.location, base_url=self.base_url)

    @classmethod
    def from_settings(cls) -> "AssetStore":
        subdir = settings.VEHICLE_UPLOAD_SUBDIR
        return cls(
            location=os.path.join(settings.MEDIA_ROOT, subdir),
            base_url=f"{settings.MEDIA_URL.rstrip('/')}/{subdir}/",
        )

    # -----------------------------
    # Diretório raiz
    # -----------------------------
    def ensure_root(self) -> None:
        try:
            os.makedirs(self.location, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(
                f"No se pudo crear el directorio de imágenes '{self.location}': {exc}"
            ) from exc

    # -----------------------------
    # Escrita
    # -----------------------------
    @staticmethod
    def unique_name(original_name: str) -> str:
        base = os.path.basename(original_name or "imagen")
        stem, ext = os.path.splitext(base)
        stem = slugify(stem) or "imagen"
        ext = ext.lower() if ext[1:].isalnum() else ""
        stamp = timezone.now().strftime("%Y%m%d%H%M%S%f")
        return f"{stamp}-{secrets.token_hex(4)}-{stem}{ext}"

    def save(self, upload) -> str:
        """
        Grava o arquivo inteiro em um temporário no mesmo diretório e só então
        faz os.replace para o nome final (escrita atômica).
        Devolve a URL relativa do arquivo.
        """
        original = getattr(upload, "name", None) or "imagen"
        name = self.unique_name(original)
        target = os.path.join(self.location, name)

        tmp_path: Optional[str] = None
        try:
            self.ensure_root()
            fd, tmp_path = tempfile.mkstemp(dir=self.location, prefix=".upload-", suffix=".part")
            with os.fdopen(fd, "wb") as fh:
                if hasattr(upload, "seek"):
                    upload.seek(0)
                for chunk in upload.chunks():
                    fh.write(chunk)
            os.replace(tmp_path, target)
            tmp_path = None
        except (OSError, StorageUnavailable) as exc:
            raise AssetWriteError(original, str(exc)) from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        url = self.base_url + name
        logger.info("Imagen guardada: %s -> %s", original, url)
        return url

    # -----------------------------
    # Resolução / leitura
    # -----------------------------
    def name_from_url(self, relative_url: str) -> Optional[str]:
        """URL relativa -> nome do arquivo na raiz; None se não pertence a esta raiz."""
        if not relative_url or not relative_url.startswith(self.base_url):
            return None
        name = relative_url[len(self.base_url):]
        # só arquivos planos na raiz (sem subdiretórios nem '..')
        if not name or PurePosixPath(name).name != name or name in (".", ".."):
            return None
        return name

    def exists(self, relative_url: str) -> bool:
        name = self.name_from_url(relative_url)
        if name is None:
            return False
        return self.storage.exists(name)

    # -----------------------------
    # Remoção
    # -----------------------------
    def delete(self, relative_url: str) -> bool:
        """
        Remove o arquivo referenciado. Arquivo ausente NÃO é erro (delete
        idempotente); outras falhas de I/O são apenas logadas, para não
        derrubar a exclusão do veículo.
        """
        name = self.name_from_url(relative_url)
        if name is None:
            logger.warning("URL de imagen fuera del directorio de subidas, se ignora: %r", relative_url)
            return False
        path = self.storage.path(name)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug("Imagen ya eliminada: %s", relative_url)
            return False
        except OSError as exc:
            logger.warning("No se pudo eliminar la imagen %s: %s", relative_url, exc)
            return False
        logger.info("Imagen eliminada: %s", relative_url)
        return True
