# vehicles/fields.py
import json
import logging

from django.db import models

logger = logging.getLogger(__name__)


class StringListField(models.TextField):
    """
    Lista de strings persistida como texto JSON ('["a", "b"]').

    A serialização fica só aqui: quem usa o modelo sempre vê `list`.
    Lista vazia vira "[]" (nunca NULL), e NULL/texto corrompido lido do
    banco vira [] para não quebrar a listagem.
    """

    description = "Lista de strings serializada em JSON"

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("default", list)
        kwargs.setdefault("blank", True)
        super().__init__(*args, **kwargs)

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        if kwargs.get("default") is list:
            del kwargs["default"]
        if kwargs.get("blank") is True:
            del kwargs["blank"]
        return name, path, args, kwargs

    @staticmethod
    def _parse(value):
        if value is None or value == "":
            return []
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Lista serializada inválida no banco: %r", value)
            return []
        if not isinstance(parsed, list):
            logger.warning("Esperava lista JSON, veio %s", type(parsed).__name__)
            return []
        return [str(item) for item in parsed]

    def from_db_value(self, value, expression, connection):
        return self._parse(value)

    def to_python(self, value):
        if isinstance(value, list):
            return value
        if isinstance(value, tuple):
            return list(value)
        return self._parse(value)

    def get_prep_value(self, value):
        if value is None:
            value = []
        if isinstance(value, str):
            # já serializado (ex.: vindo de fixture); normaliza passando pelo parse
            value = self._parse(value)
        return json.dumps([str(item) for item in value], ensure_ascii=False)

    def value_to_string(self, obj):
        return self.get_prep_value(self.value_from_object(obj))
