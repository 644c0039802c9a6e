# ho_core/reports/apps.py
from django.apps import AppConfig


class ReportsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ho_core.reports"
    label = "reports"
