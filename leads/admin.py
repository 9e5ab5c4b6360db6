# leads/admin.py
from django.contrib import admin
from .models import Lead

@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "source", "status", "assigned_to", "created_at")
    search_fields = ("name", "email", "phone")
    list_filter = ("status", "source")
