# ho_core/officers/admin.py
import uuid

from django.contrib import admin
from django.utils import timezone

from ho_core.officers.dates import calculate_sign_out_date
from ho_core.officers.models import HouseOfficer


@admin.register(HouseOfficer)
class HouseOfficerAdmin(admin.ModelAdmin):
    list_display = (
        "full_name",
        "gender",
        "unit_assigned",
        "date_signed_in",
        "expected_sign_out_date",
        "clinical_presentation_date",
        "created_at",
    )
    list_filter = ("unit_assigned", "gender")
    search_fields = ("full_name", "clinical_presentation_topic")
    readonly_fields = ("id", "created_at", "expected_sign_out_date")
    ordering = ("-created_at",)

    def save_model(self, request, obj, form, change):
        # Rows edited here bypass the officer services, so keep the derived date in step.
        if not obj.id:
            obj.id = uuid.uuid4().hex
        if not obj.created_at:
            obj.created_at = timezone.now()
        obj.expected_sign_out_date = calculate_sign_out_date(obj.date_signed_in)
        super().save_model(request, obj, form, change)
