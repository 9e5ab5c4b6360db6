# vehicles/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("vehicles/", views.vehicle_list_view, name="vehicle_list"),
    path("vehicles/<int:vehicle_id>/", views.vehicle_detail_view, name="vehicle_detail"),
    path("reports/", views.reports_view, name="vehicle_reports"),
]
