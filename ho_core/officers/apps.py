# ho_core/officers/apps.py
from django.apps import AppConfig


class OfficersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ho_core.officers"
    label = "officers"
