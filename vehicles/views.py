# vehicles/views.py
import json
import logging
from typing import Dict

from django.http import JsonResponse, HttpResponseBadRequest
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_http_methods

from .exceptions import (
    AssetWriteError,
    ConstraintViolation,
    DuplicateKey,
    ValidationError,
)
from .models import Vehicle
from .reports import get_vehicle_report_data
from .services import VehicleService, get_vehicle_service

logger = logging.getLogger(__name__)

###############################################################################
# Fronteira HTTP do inventário
#
# Decompõe a requisição (multipart ou JSON) em campos + arquivos, chama o
# VehicleService e devolve JSON. Erros de domínio viram status HTTP:
#   ValidationError / AssetWriteError -> 400 (usuário corrige e reenvia)
#   DuplicateKey                      -> 409 ("VIN ya existe")
#   ConstraintViolation               -> 422
###############################################################################


def vehicle_to_dict(v: Vehicle, service: VehicleService) -> Dict:
    """
    Serializa um veículo para o front.
    """
    return {
        "id": v.id,
        "make": v.make,
        "model": v.model,
        "year": v.year,
        "vin": v.vin,
        "price": float(v.price),
        "mileage": float(v.mileage),
        "status": v.status,
        "color": v.color,
        "engine": v.engine,
        "transmission": v.transmission,
        "features": list(v.features),
        "condition": v.condition,
        "documentation": v.documentation,
        "entry_date": v.entry_date.isoformat(),
        "cost": float(v.cost) if v.cost is not None else None,
        "image_url": v.image_url,
        "images": list(v.images),
        "display_image": service.display_image(v),
        "created_at": v.created_at.isoformat() if v.created_at else None,
        "updated_at": v.updated_at.isoformat() if v.updated_at else None,
    }


def _error_response(exc: Exception) -> JsonResponse:
    if isinstance(exc, ValidationError):
        return JsonResponse({"error": "validation", "violations": exc.violations}, status=400)
    if isinstance(exc, AssetWriteError):
        return JsonResponse({"error": "asset_write", "file": exc.filename, "message": str(exc)}, status=400)
    if isinstance(exc, DuplicateKey):
        return JsonResponse({"error": "duplicate", "field": exc.field, "message": str(exc)}, status=409)
    if isinstance(exc, ConstraintViolation):
        return JsonResponse({"error": "constraint", "message": str(exc)}, status=422)
    raise exc


def _request_fields(request):
    """Campos do corpo: JSON ou form (sem o token de CSRF)."""
    if request.content_type == "application/json":
        data = json.loads(request.body.decode("utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError("Se esperaba un objeto JSON.")
        return data
    data = request.POST.copy()
    data.pop("csrfmiddlewaretoken", None)
    return data


def _not_found(vehicle_id: int) -> JsonResponse:
    return JsonResponse({"error": "not_found", "message": f"Vehículo {vehicle_id} no encontrado."}, status=404)


@csrf_protect
@require_http_methods(["GET", "POST"])
def vehicle_list_view(request):
    service = get_vehicle_service()

    if request.method == "GET":
        items = [vehicle_to_dict(v, service) for v in service.get_all_vehicles()]
        return JsonResponse({"items": items, "total": len(items)}, json_dumps_params={"ensure_ascii": False})

    try:
        fields = _request_fields(request)
    except ValueError:
        return HttpResponseBadRequest("Payload inválido.")

    try:
        vehicle_id = service.add_vehicle(fields, request.FILES)
    except (ValidationError, AssetWriteError, DuplicateKey, ConstraintViolation) as exc:
        return _error_response(exc)

    vehicle = service.get_vehicle_by_id(vehicle_id)
    return JsonResponse(
        {"id": vehicle_id, "vehicle": vehicle_to_dict(vehicle, service)},
        status=201,
        json_dumps_params={"ensure_ascii": False},
    )


@csrf_protect
@require_http_methods(["GET", "POST", "DELETE"])
def vehicle_detail_view(request, vehicle_id: int):
    service = get_vehicle_service()

    if request.method == "DELETE":
        if not service.delete_vehicle(vehicle_id):
            return _not_found(vehicle_id)
        return JsonResponse({"deleted": True, "id": vehicle_id})

    if request.method == "POST":
        try:
            fields = _request_fields(request)
        except ValueError:
            return HttpResponseBadRequest("Payload inválido.")
        try:
            changed = service.update_vehicle(vehicle_id, fields, request.FILES)
        except (ValidationError, AssetWriteError, DuplicateKey, ConstraintViolation) as exc:
            return _error_response(exc)
        if not changed:
            return _not_found(vehicle_id)

    vehicle = service.get_vehicle_by_id(vehicle_id)
    if vehicle is None:
        return _not_found(vehicle_id)
    return JsonResponse(vehicle_to_dict(vehicle, service), json_dumps_params={"ensure_ascii": False})


@require_http_methods(["GET"])
def reports_view(request):
    return JsonResponse(get_vehicle_report_data().as_dict(), json_dumps_params={"ensure_ascii": False})
