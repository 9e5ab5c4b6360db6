# vehicles/reports.py
from dataclasses import dataclass, asdict, field
from typing import Dict, Optional

from django.core.cache import cache
from django.db.models import Avg, Count

from .cache import REPORTS_VIEW
from .models import IN_STOCK_STATUSES, Vehicle


@dataclass
class VehicleReportData:
    total_vehicles: int = 0
    vehicles_by_status: Dict[str, int] = field(default_factory=dict)
    average_price: Optional[float] = None
    average_mileage: Optional[float] = None

    def as_dict(self) -> Dict:
        return asdict(self)


def compute_vehicle_report() -> VehicleReportData:
    """
    Agregados do inventário:
      - total de veículos,
      - contagem por status,
      - preço e quilometragem médios do que ainda está em estoque
        (Disponible, Reservado, En preparación). None quando não há nenhum.
    """
    qs = Vehicle.objects.all()
    total = qs.count()

    by_status = {
        row["status"]: row["c"]
        for row in qs.order_by().values("status").annotate(c=Count("id"))
    }

    averages = qs.filter(status__in=IN_STOCK_STATUSES).aggregate(
        avg_price=Avg("price"),
        avg_mileage=Avg("mileage"),
    )
    avg_price = averages.get("avg_price")
    avg_mileage = averages.get("avg_mileage")

    return VehicleReportData(
        total_vehicles=total,
        vehicles_by_status=by_status,
        average_price=float(avg_price) if avg_price is not None else None,
        average_mileage=float(avg_mileage) if avg_mileage is not None else None,
    )


def get_vehicle_report_data() -> VehicleReportData:
    """Relatório em cache até a próxima mutação (VehicleService invalida 'reports')."""
    return cache.get_or_set(REPORTS_VIEW, compute_vehicle_report)
