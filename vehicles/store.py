# vehicles/store.py
import logging
from typing import Dict, List, Optional

from django.core.management import call_command
from django.db import DEFAULT_DB_ALIAS, DatabaseError, IntegrityError, connections, transaction
from django.db.migrations.executor import MigrationExecutor
from django.utils import timezone

from .exceptions import ConstraintViolation, DuplicateKey, StorageUnavailable
from .models import Vehicle

logger = logging.getLogger(__name__)

# Campos de sistema não entram em insert/update
SYSTEM_FIELDS = ("id", "created_at", "updated_at")
WRITABLE_FIELDS = frozenset(
    f.name for f in Vehicle._meta.concrete_fields if f.name not in SYSTEM_FIELDS
)


def translate_integrity_error(exc: IntegrityError, values: Dict) -> Exception:
    """
    Converte IntegrityError do banco no erro de domínio equivalente.
    UNIQUE -> DuplicateKey (só o VIN é único); qualquer outra restrição
    (CHECK dos enums, NOT NULL) -> ConstraintViolation.
    """
    msg = str(exc)
    lowered = msg.lower()
    if "unique" in lowered or "duplicate" in lowered:
        return DuplicateKey("vin", values.get("vin"))
    return ConstraintViolation(msg)


class VehicleStore:
    """
    Motor de armazenamento dos veículos (uma tabela, via ORM do Django).

    Ciclo de vida explícito: quem sobe o processo chama open() (cria/migra o
    schema se preciso) e close() no encerramento. `features` e `images` são
    listas do lado de fora; a serialização JSON fica no StringListField.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    def open(self) -> None:
        connection = connections[self.using]
        try:
            connection.ensure_connection()
            executor = MigrationExecutor(connection)
            plan = executor.migration_plan(executor.loader.graph.leaf_nodes())
            if plan:
                # idempotente: só aplica o que falta
                call_command("migrate", database=self.using, interactive=False, verbosity=0)
                logger.info("Esquema migrado (%d migraciones aplicadas)", len(plan))
        except DatabaseError as exc:
            logger.exception("No se pudo abrir la base de datos '%s'", self.using)
            raise StorageUnavailable(f"Base de datos no disponible: {exc}") from exc

    def close(self) -> None:
        connections[self.using].close()
        logger.info("Conexión a la base de datos cerrada.")

    @property
    def objects(self):
        return Vehicle.objects.using(self.using)

    # -----------------------------
    # Escrita
    # -----------------------------
    @staticmethod
    def _prepare(values: Dict) -> Dict:
        unknown = set(values) - WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no persistibles: {sorted(unknown)}")
        prepared = dict(values)
        if prepared.get("vin"):
            prepared["vin"] = prepared["vin"].upper()
        return prepared

    def insert(self, record: Dict) -> int:
        values = self._prepare(record)
        try:
            with transaction.atomic(using=self.using):
                vehicle = self.objects.create(**values)
        except IntegrityError as exc:
            raise translate_integrity_error(exc, values) from exc
        return vehicle.pk

    def update(self, vehicle_id: int, fields: Dict) -> bool:
        """
        Atualização parcial: só os campos enviados são gravados.
        False se nenhum registro tem esse id (ou não há nada a atualizar).
        """
        values = self._prepare(fields)
        if not values:
            logger.warning("Sin cambios para el vehículo %s", vehicle_id)
            return False
        # queryset.update() não dispara auto_now
        values["updated_at"] = timezone.now()
        try:
            with transaction.atomic(using=self.using):
                changed = self.objects.filter(pk=vehicle_id).update(**values)
        except IntegrityError as exc:
            raise translate_integrity_error(exc, values) from exc
        return changed > 0

    def delete(self, vehicle_id: int) -> bool:
        deleted, _ = self.objects.filter(pk=vehicle_id).delete()
        return deleted > 0

    # -----------------------------
    # Leitura
    # -----------------------------
    def get_all(self) -> List[Vehicle]:
        """Todos os veículos, mais recentes primeiro."""
        return list(self.objects.all())

    def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.objects.filter(pk=vehicle_id).first()
