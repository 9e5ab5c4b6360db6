# vehicles/management/commands/seed_vehicles.py
import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from faker import Faker

from vehicles.exceptions import DuplicateKey
from vehicles.models import Transmission, VehicleStatus
from vehicles.services import get_vehicle_service

BRANDS = [
    ("Seat", ["Ibiza", "León", "Arona", "Ateca"]),
    ("Volkswagen", ["Polo", "Golf", "T-Roc", "Tiguan"]),
    ("Renault", ["Clio", "Captur", "Mégane", "Austral"]),
    ("Toyota", ["Corolla", "Yaris", "C-HR", "RAV4"]),
    ("Peugeot", ["208", "308", "2008", "3008"]),
    ("Dacia", ["Sandero", "Duster", "Jogger"]),
    ("Kia", ["Ceed", "Sportage", "Niro"]),
]

ENGINES = ["1.0 TSI", "1.5 TDI", "1.6 HDi", "2.0 TDI", "1.2 PureTech", "Híbrido 1.8", "Eléctrico 150kW"]
COLORS = ["Negro", "Blanco", "Gris", "Plata", "Azul", "Rojo"]
FEATURES = [
    "Climatizador", "GPS", "Cámara trasera", "Sensores de aparcamiento",
    "Asientos calefactables", "Techo solar", "Apple CarPlay", "Control de crucero",
]

# VIN real não usa I, O, Q.
_VIN_CHARS = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"

def unique_vin():
    return "".join(random.choices(_VIN_CHARS, k=17))

class Command(BaseCommand):
    help = "Puebla el inventario con vehículos de prueba."

    def add_arguments(self, parser):
        parser.add_argument("--min", "--n", dest="n", type=int, default=50,
                            help="Cantidad de vehículos a crear (alias: --min, --n)")

    def handle(self, *args, **options):
        fake = Faker("es_ES")
        service = get_vehicle_service()
        service.open()
        target = options["n"]
        created = 0

        while created < target:
            brand, models = random.choice(BRANDS)
            fields = {
                "make": brand,
                "model": random.choice(models),
                "year": random.randint(2008, 2025),
                "vin": unique_vin(),
                "price": Decimal(f"{random.uniform(6_000, 60_000):.2f}"),
                "mileage": random.randint(0, 250_000),
                "status": random.choice(VehicleStatus.values),
                "transmission": random.choice(Transmission.values),
                "color": random.choice(COLORS),
                "engine": random.choice(ENGINES),
                "features": random.sample(FEATURES, k=random.randint(0, 4)),
                "condition": fake.sentence(nb_words=8),
                "documentation": "ITV al día" if random.random() < 0.8 else "",
                "entry_date": fake.date_between(start_date="-1y", end_date="today").isoformat(),
                "cost": Decimal(f"{random.uniform(4_000, 50_000):.2f}") if random.random() < 0.7 else "",
            }
            try:
                service.add_vehicle(fields)
            except DuplicateKey:
                # colisão de VIN aleatório: sorteia outro
                continue
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Vehículos creados: {created}"))
