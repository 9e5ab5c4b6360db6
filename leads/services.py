# leads/services.py
import logging
from typing import List

from django.db import IntegrityError, transaction

from vehicles.cache import CacheInvalidator
from vehicles.exceptions import ConstraintViolation

from .forms import validate_lead_input
from .models import Lead

logger = logging.getLogger(__name__)

LEADS_VIEW = "leads"


def add_lead(data, invalidator=None) -> int:
    values = validate_lead_input(data)
    try:
        with transaction.atomic():
            lead = Lead.objects.create(**values)
    except IntegrityError as exc:
        # Lead não tem campo único: só o CHECK do status pode falhar aqui
        raise ConstraintViolation(str(exc)) from exc
    logger.info("Lead añadido: id=%s", lead.pk)
    (invalidator or CacheInvalidator()).invalidate(LEADS_VIEW)
    return lead.pk


def get_all_leads() -> List[Lead]:
    return list(Lead.objects.all())
