# vehicles/admin.py
from django.contrib import admin
from .models import Vehicle

@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("make", "model", "year", "vin", "status", "transmission", "price", "mileage", "entry_date")
    search_fields = ("make", "model", "vin", "color", "engine")
    list_filter = ("status", "transmission", "make", "year")
    readonly_fields = ("created_at", "updated_at")
