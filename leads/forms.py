# leads/forms.py
from django import forms

from vehicles.exceptions import ValidationError

from .models import LeadStatus

OPTIONAL_TEXT_FIELDS = ("email", "phone", "source", "assigned_to", "notes")


class LeadForm(forms.Form):
    name = forms.CharField(max_length=120, error_messages={"required": "El nombre es obligatorio."})
    email = forms.EmailField(required=False, error_messages={"invalid": "Email inválido."})
    phone = forms.CharField(max_length=30, required=False)
    source = forms.CharField(max_length=60, required=False)
    status = forms.ChoiceField(choices=LeadStatus.choices, required=False, error_messages={
        "invalid_choice": "Estado inválido: %(value)s.",
    })
    assigned_to = forms.CharField(max_length=80, required=False)
    notes = forms.CharField(required=False)


def validate_lead_input(data) -> dict:
    """Mesmo contrato da validação de veículos: tudo ou ValidationError com todas as violações."""
    form = LeadForm(data=data)
    if not form.is_valid():
        raise ValidationError({name: [str(m) for m in errs] for name, errs in form.errors.items()})
    cleaned = dict(form.cleaned_data)
    for name in OPTIONAL_TEXT_FIELDS:
        if cleaned.get(name) == "":
            cleaned[name] = None
    cleaned["status"] = cleaned.get("status") or LeadStatus.NUEVO
    return cleaned
