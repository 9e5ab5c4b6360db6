# vehicles/exceptions.py
from typing import Dict, List, Optional


class VehicleError(Exception):
    """Base de todos os erros de domínio do inventário."""


class ValidationError(VehicleError):
    """
    Um ou mais campos de entrada violam tipo/faixa/enumeração/arquivo.

    `violations` traz TODAS as violações ({campo: [mensagens]}), nunca só a
    primeira, para que a camada de apresentação mostre tudo de uma vez.
    """

    def __init__(self, violations: Dict[str, List[str]]):
        self.violations = {field: list(msgs) for field, msgs in violations.items()}
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [f"{field}: {'; '.join(msgs)}" for field, msgs in self.violations.items()]
        return "Datos inválidos -> " + " | ".join(parts)

    @property
    def fields(self) -> List[str]:
        return list(self.violations)


class AssetWriteError(VehicleError):
    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        self.reason = reason
        msg = f"No se pudo guardar la imagen '{filename}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DuplicateKey(VehicleError):
    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Error: El {field.upper()} '{value}' ya existe en la base de datos.")


class ConstraintViolation(VehicleError):
    """Valor rejeitado pelo CHECK do banco (indica furo na validação se acontecer)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Restricción de la base de datos violada: {detail}")


class StorageUnavailable(VehicleError):
    """Banco ou diretório de uploads inacessível. Fatal na inicialização."""
