# vehicles/forms.py
from dataclasses import dataclass, field, fields as dataclass_fields
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django import forms
from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.utils import timezone
from django.utils.datastructures import MultiValueDict

from .exceptions import ValidationError
from .models import VehicleStatus, Transmission

###############################################################################
# Validação de entrada de veículos
#
# Ponto ÚNICO de coerção: tudo que vem de formulário (strings, números, arquivos)
# passa por aqui e sai em tipos canônicos (int, Decimal, date, enums, listas).
# Nenhuma validação para no primeiro erro: o Form do Django junta todos em
# `form.errors`, que repassamos inteiros dentro de ValidationError.
###############################################################################

# Nomes vindos do formulário web (camelCase) -> nomes dos campos
FIELD_ALIASES = {
    "entryDate": "entry_date",
    "imageUrl": "image_url",
}

# Campos de lista: sequência vinda pronta do chamador não é re-separada
LIST_FIELDS = ("features", "images")

OPTIONAL_TEXT_FIELDS = ("color", "engine", "condition", "documentation", "image_url")


# -----------------------------
# Campos customizados
# -----------------------------
class StringListInput(forms.Widget):
    """Lê todos os valores de um campo repetido (features=a&features=b)."""

    def value_from_datadict(self, data, files, name):
        if hasattr(data, "getlist"):
            values = data.getlist(name)
            if len(values) == 1:
                return values[0]
            return values or None
        return data.get(name)


class StringListFormField(forms.Field):
    """
    Aceita lista pronta ou string separada por vírgulas.
    Resultado: lista de strings aparadas e não vazias, na ordem original
    (duplicatas são mantidas).
    """

    widget = StringListInput

    def __init__(self, *, split_commas=True, **kwargs):
        self.split_commas = split_commas
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if isinstance(value, str):
            items = value.split(",") if self.split_commas else [value]
        elif isinstance(value, (list, tuple)):
            items = value
        else:
            raise forms.ValidationError("Se esperaba una lista de textos.", code="invalid")
        return [str(item).strip() for item in items if item is not None and str(item).strip()]


class IsoDateField(forms.DateField):
    """Data ISO-8601; aceita também o timestamp completo do JS (2024-05-01T10:00:00.000Z)."""

    input_formats = ["%Y-%m-%d"]

    def to_python(self, value):
        if isinstance(value, str) and "T" in value:
            value = value.split("T", 1)[0]
        return super().to_python(value)


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class ImageFilesField(forms.FileField):
    """
    Lista de arquivos de imagem enviados. Cada arquivo é checado
    individualmente (tamanho e tipo) e TODOS os inválidos aparecem no erro,
    cada um citando o nome do arquivo.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("widget", MultipleFileInput())
        kwargs.setdefault("required", False)
        super().__init__(**kwargs)

    def clean(self, data, initial=None):
        if data in self.empty_values:
            return []
        files = data if isinstance(data, (list, tuple)) else [data]

        max_bytes = settings.VEHICLE_IMAGE_MAX_BYTES
        accepted = settings.VEHICLE_IMAGE_CONTENT_TYPES
        max_mb = max_bytes // (1024 * 1024)

        errors = []
        cleaned = []
        for f in files:
            if not isinstance(f, UploadedFile):
                errors.append(forms.ValidationError("Archivo de imagen inválido.", code="invalid"))
                continue
            if f.size > max_bytes:
                errors.append(forms.ValidationError(
                    f"'{f.name}': el tamaño máximo es {max_mb}MB.", code="file_too_large",
                ))
            if (f.content_type or "").lower() not in accepted:
                errors.append(forms.ValidationError(
                    f"'{f.name}': solo se aceptan .jpg, .jpeg, .png, .webp y .avif.", code="file_type",
                ))
            cleaned.append(f)
        if errors:
            raise forms.ValidationError(errors)
        return cleaned


# -----------------------------
# Formulário
# -----------------------------
class VehicleForm(forms.Form):
    make = forms.CharField(max_length=80, error_messages={"required": "La marca es obligatoria."})
    model = forms.CharField(max_length=80, error_messages={"required": "El modelo es obligatorio."})
    year = forms.IntegerField(error_messages={
        "required": "El año es obligatorio.",
        "invalid": "Año inválido.",
    })
    vin = forms.CharField(
        min_length=17,
        max_length=17,
        error_messages={
            "required": "El VIN es obligatorio.",
            "min_length": "El VIN debe tener 17 caracteres.",
            "max_length": "El VIN debe tener 17 caracteres.",
        },
    )
    price = forms.DecimalField(max_digits=12, decimal_places=2, error_messages={
        "required": "El precio es obligatorio.",
        "invalid": "El precio debe ser un número.",
    })
    mileage = forms.DecimalField(
        min_value=0,
        max_digits=12,
        decimal_places=2,
        error_messages={
            "required": "El kilometraje es obligatorio.",
            "invalid": "El kilometraje debe ser un número.",
            "min_value": "El kilometraje no puede ser negativo.",
        },
    )
    status = forms.ChoiceField(choices=VehicleStatus.choices, error_messages={
        "required": "El estado es obligatorio.",
        "invalid_choice": "Estado inválido: %(value)s.",
    })
    transmission = forms.ChoiceField(choices=Transmission.choices, error_messages={
        "required": "La transmisión es obligatoria.",
        "invalid_choice": "Transmisión inválida: %(value)s.",
    })
    color = forms.CharField(max_length=40, required=False)
    engine = forms.CharField(max_length=60, required=False)
    features = StringListFormField()
    condition = forms.CharField(required=False)
    documentation = forms.CharField(required=False)
    entry_date = IsoDateField(required=False, error_messages={"invalid": "Fecha de entrada inválida."})
    cost = forms.DecimalField(
        required=False,
        min_value=0,
        max_digits=12,
        decimal_places=2,
        error_messages={
            "invalid": "El coste debe ser un número.",
            "min_value": "El coste no puede ser negativo.",
        },
    )
    image_url = forms.URLField(
        max_length=500,
        required=False,
        assume_scheme="https",
        error_messages={"invalid": "URL de imagen inválida."},
    )
    images = ImageFilesField()

    def clean_year(self):
        year = self.cleaned_data["year"]
        # teto recalculado a cada validação (virada de ano sem restart)
        max_year = timezone.localdate().year + 1
        if year < 1900 or year > max_year:
            raise forms.ValidationError("Año inválido.", code="year_range")
        return year

    def clean_vin(self):
        return self.cleaned_data["vin"].upper()

    def clean_price(self):
        price = self.cleaned_data["price"]
        if price <= 0:
            raise forms.ValidationError("El precio debe ser positivo.", code="not_positive")
        return price


# -----------------------------
# Objeto de valor
# -----------------------------
@dataclass
class VehicleInput:
    make: str
    model: str
    year: int
    vin: str
    price: Decimal
    mileage: Decimal
    status: str
    transmission: str
    entry_date: date
    color: Optional[str] = None
    engine: Optional[str] = None
    condition: Optional[str] = None
    documentation: Optional[str] = None
    cost: Optional[Decimal] = None
    image_url: Optional[str] = None
    features: List[str] = field(default_factory=list)
    images: List[UploadedFile] = field(default_factory=list)

    def as_record(self) -> Dict:
        """Campos persistíveis (sem os arquivos, que viram URLs no serviço)."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclass_fields(self)
            if f.name != "images"
        }


# -----------------------------
# Utilidades
# -----------------------------
def _to_multivalue(mapping, sequence_fields=()) -> MultiValueDict:
    """
    Converte o mapeamento em MultiValueDict, aplicando os aliases camelCase.

    QueryDict/MultiValueDict (form HTTP) passa valor a valor. Em dict comum
    (JSON ou chamada Python), lista em `sequence_fields` vira UM valor, para
    que o widget a devolva intacta em vez de tratá-la como texto único.
    """
    out = MultiValueDict()
    if mapping is None:
        return out
    if hasattr(mapping, "lists"):
        for key, values in mapping.lists():
            out.setlist(FIELD_ALIASES.get(key, key), list(values))
        return out
    for key, value in mapping.items():
        key = FIELD_ALIASES.get(key, key)
        if isinstance(value, (list, tuple)):
            if key in sequence_fields:
                out.setlist(key, [list(value)])
            else:
                out.setlist(key, list(value))
        else:
            out.setlist(key, [value])
    return out


def _violations(form: forms.Form) -> Dict[str, List[str]]:
    return {name: [str(m) for m in errors] for name, errors in form.errors.items()}


def _blank_to_none(cleaned: Dict) -> Dict:
    for name in OPTIONAL_TEXT_FIELDS:
        if name in cleaned and cleaned[name] == "":
            cleaned[name] = None
    return cleaned


def validate_vehicle_input(data, files=None) -> VehicleInput:
    """
    Valida um cadastro completo de veículo.

    data:  mapeamento campo -> valor cru (strings do form, números, listas)
    files: mapeamento "images" -> arquivo(s) enviados (UploadedFile)

    Retorna VehicleInput em tipos canônicos ou levanta ValidationError com
    todas as violações encontradas.
    """
    form = VehicleForm(data=_to_multivalue(data, LIST_FIELDS), files=_to_multivalue(files))
    if not form.is_valid():
        raise ValidationError(_violations(form))

    cleaned = _blank_to_none(dict(form.cleaned_data))
    if cleaned.get("entry_date") is None:
        cleaned["entry_date"] = timezone.localdate()
    return VehicleInput(**cleaned)


class VehicleUpdateForm(VehicleForm):
    # na edição `images` é a lista (reordenada/podada) de URLs já salvas
    images = StringListFormField(split_commas=False)


def check_vehicle_update(data) -> Tuple[Dict, Dict[str, List[str]]]:
    """
    Validação parcial: só os campos enviados são checados.
    Campos desconhecidos (ou de sistema, como id/created_at) são recusados.

    Devolve (campos válidos, violações) sem levantar, para o serviço juntar
    estas violações às dos arquivos enviados.
    """
    mv = _to_multivalue(data, LIST_FIELDS)
    form = VehicleUpdateForm(data=mv)

    unknown = [key for key in mv.keys() if key not in form.fields]
    form.fields = {name: f for name, f in form.fields.items() if name in mv}

    violations: Dict[str, List[str]] = {}
    if not form.is_valid():
        violations.update(_violations(form))
    for key in unknown:
        violations[key] = ["Campo desconocido o no editable."]

    cleaned = _blank_to_none(dict(form.cleaned_data))
    if "entry_date" in cleaned and cleaned["entry_date"] is None:
        # entry_date é NOT NULL; vazio na edição significa "manter"
        cleaned.pop("entry_date")
    return cleaned, violations


def validate_vehicle_update(data) -> Dict:
    """Como check_vehicle_update, mas levanta ValidationError se houver violações."""
    cleaned, violations = check_vehicle_update(data)
    if violations:
        raise ValidationError(violations)
    return cleaned
