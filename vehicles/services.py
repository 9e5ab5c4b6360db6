# vehicles/services.py
import logging
from typing import Dict, List, Optional, Tuple

from django import forms
from django.conf import settings

from .assets import AssetStore
from .cache import INVENTORY_VIEW, REPORTS_VIEW, CacheInvalidator, vehicle_view_key
from .exceptions import ValidationError
from .forms import ImageFilesField, check_vehicle_update, validate_vehicle_input
from .models import Vehicle
from .store import VehicleStore

logger = logging.getLogger(__name__)

###############################################################################
#                              SERVIÇO DE VEÍCULOS                              #
###############################################################################
# Ponto único de entrada para cadastrar/editar/excluir veículos. Compõe:
#   1) validação (vehicles.forms)       -> nada acontece se a entrada é inválida
#   2) imagens em disco (AssetStore)    -> sempre ANTES do insert
#   3) banco (VehicleStore)             -> DuplicateKey/ConstraintViolation sobem intactos
#   4) invalidação das views de leitura (inventário, relatórios)
#
# Não existe transação cobrindo disco + banco: se o processo cair entre salvar
# as imagens e o insert, os arquivos ficam órfãos. Na edição, os uploads novos
# são apagados de volta se o update do banco falhar. Na exclusão a linha sai
# primeiro e os arquivos depois; falha ao apagar arquivo só gera log.
###############################################################################


def _uploads_from(files) -> Dict:
    """Aceita {"images": [...]} (request.FILES) ou uma lista solta de arquivos."""
    if files is None:
        return {}
    if isinstance(files, (list, tuple)):
        return {"images": list(files)}
    return files


class VehicleService:

    def __init__(
        self,
        store: Optional[VehicleStore] = None,
        assets: Optional[AssetStore] = None,
        invalidator: Optional[CacheInvalidator] = None,
        placeholder_image: Optional[str] = None,
    ):
        self.store = store or VehicleStore()
        self.assets = assets or AssetStore.from_settings()
        self.invalidator = invalidator or CacheInvalidator()
        self.placeholder_image = placeholder_image or settings.VEHICLE_PLACEHOLDER_IMAGE

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    def open(self) -> None:
        self.store.open()
        self.assets.ensure_root()

    def close(self) -> None:
        self.store.close()

    def _invalidate(self, *view_keys: str) -> None:
        for key in view_keys:
            self.invalidator.invalidate(key)

    # -----------------------------
    # Cadastro
    # -----------------------------
    def add_vehicle(self, fields, files=None) -> int:
        """
        Valida, grava as imagens e insere o veículo. Devolve o id novo.

        Erros: ValidationError (nada gravado), AssetWriteError (sem insert;
        imagens salvas antes da falha permanecem em disco), DuplicateKey,
        ConstraintViolation.
        """
        data = validate_vehicle_input(fields, _uploads_from(files))

        urls: List[str] = []
        for upload in data.images:
            urls.append(self.assets.save(upload))

        record = data.as_record()
        record["images"] = urls
        # imagem principal: primeiro upload; senão a URL avulsa informada
        record["image_url"] = urls[0] if urls else data.image_url

        vehicle_id = self.store.insert(record)
        logger.info("Vehículo añadido: id=%s vin=%s imágenes=%d", vehicle_id, data.vin, len(urls))
        self._invalidate(INVENTORY_VIEW, REPORTS_VIEW)
        return vehicle_id

    # -----------------------------
    # Leitura
    # -----------------------------
    def get_all_vehicles(self) -> List[Vehicle]:
        return self.store.get_all()

    def get_vehicle_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.store.get_by_id(vehicle_id)

    def display_image(self, vehicle: Vehicle) -> str:
        """
        Imagem para exibição: primeira da sequência que ainda existe em disco,
        depois a URL avulsa, por fim o placeholder. Nunca levanta erro por
        arquivo sumido.
        """
        candidates = list(vehicle.images)
        if vehicle.image_url:
            candidates.append(vehicle.image_url)
        for url in candidates:
            if self.assets.name_from_url(url) is None:
                # URL externa: não há como checar, usa como está
                return url
            if self.assets.exists(url):
                return url
        return self.placeholder_image

    # -----------------------------
    # Edição
    # -----------------------------
    def _clean_new_uploads(self, files) -> Tuple[list, List[str]]:
        """Devolve (arquivos válidos, mensagens de erro) dos uploads da edição."""
        files = _uploads_from(files)
        if hasattr(files, "getlist"):
            uploads = files.getlist("images")
        else:
            uploads = files.get("images") or []
        try:
            return ImageFilesField().clean(uploads), []
        except forms.ValidationError as exc:
            return [], list(exc.messages)

    def update_vehicle(self, vehicle_id: int, fields, files=None) -> bool:
        """
        Atualização parcial. `images` (se enviado) é a nova ordem das URLs que
        o veículo já tem; arquivos novos em `files` são salvos e anexados ao
        fim. Imagens que saíram da sequência são apagadas do disco após o
        update. Sem nada a mudar num veículo existente devolve True sem gravar.

        Todas as violações (campos, arquivos, URLs alheias) saem num único
        ValidationError.
        """
        existing = self.store.get_by_id(vehicle_id)
        if existing is None:
            return False

        changes, violations = check_vehicle_update(fields)
        uploads, upload_errors = self._clean_new_uploads(files)

        image_errors = list(violations.get("images", [])) + upload_errors
        for url in changes.get("images", []):
            if url not in existing.images:
                image_errors.append(f"'{url}' no pertenece a este vehículo.")
        if image_errors:
            violations["images"] = image_errors
        if violations:
            raise ValidationError(violations)

        if not changes and not uploads:
            logger.info("Vehículo sin cambios: id=%s", vehicle_id)
            return True

        new_urls: List[str] = []
        try:
            for upload in uploads:
                new_urls.append(self.assets.save(upload))
            changed = self.store.update(vehicle_id, self._with_images(existing, changes, new_urls))
        except Exception:
            self._discard(new_urls)
            raise
        if not changed:
            self._discard(new_urls)
            return False

        removed = [url for url in existing.images if url not in changes.get("images", existing.images)]
        for url in removed:
            self.assets.delete(url)
        logger.info("Vehículo actualizado: id=%s campos=%s", vehicle_id, sorted(changes))
        self._invalidate(INVENTORY_VIEW, REPORTS_VIEW, vehicle_view_key(vehicle_id))
        return True

    @staticmethod
    def _with_images(existing: Vehicle, changes: Dict, new_urls: List[str]) -> Dict:
        """Completa `changes` com a sequência final de imagens e a principal."""
        if "images" not in changes and not new_urls:
            return changes
        images = list(changes.get("images", existing.images)) + new_urls
        changes["images"] = images
        if "image_url" not in changes:
            if images:
                changes["image_url"] = images[0]
            elif existing.image_url in existing.images:
                changes["image_url"] = None
        return changes

    def _discard(self, urls: List[str]) -> None:
        for url in urls:
            self.assets.delete(url)

    # -----------------------------
    # Exclusão
    # -----------------------------
    def delete_vehicle(self, vehicle_id: int) -> bool:
        """
        Exclui o veículo e depois suas imagens. Idempotente: id inexistente
        devolve False. Arquivo que não pôde ser apagado não impede a exclusão.
        """
        existing = self.store.get_by_id(vehicle_id)
        if existing is None:
            return False
        images = list(existing.images)

        if not self.store.delete(vehicle_id):
            return False

        for url in images:
            self.assets.delete(url)
        logger.info("Vehículo eliminado: id=%s imágenes=%d", vehicle_id, len(images))
        self._invalidate(INVENTORY_VIEW, REPORTS_VIEW, vehicle_view_key(vehicle_id))
        return True


def get_vehicle_service() -> VehicleService:
    """Serviço montado a partir das settings (banco default, MEDIA_ROOT, cache default)."""
    return VehicleService()
