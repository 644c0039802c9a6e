# ho_core/officers/models.py
from django.db import models

from ho_core.officers.constants import Gender, Unit


class HouseOfficer(models.Model):
    """
    Durable (remote) copy of an officer record.

    Column names mirror the record wire format so the same table can be served
    by PostgREST/Supabase and by the ORM backend.
    """
    id = models.CharField(primary_key=True, max_length=64, editable=False)

    full_name = models.CharField(max_length=255, db_column="fullName")
    gender = models.CharField(max_length=16, choices=Gender.choices)
    date_signed_in = models.DateField(db_column="dateSignedIn")
    unit_assigned = models.CharField(max_length=64, choices=Unit.choices, db_column="unitAssigned", db_index=True)

    clinical_presentation_topic = models.CharField(
        max_length=255,
        blank=True,
        default="",
        db_column="clinicalPresentationTopic",
    )
    clinical_presentation_date = models.DateField(null=True, blank=True, db_column="clinicalPresentationDate")

    # Always date_signed_in + 12 weeks; written by the officer services, never derived here.
    expected_sign_out_date = models.DateField(db_column="expectedSignOutDate")

    created_at = models.DateTimeField(db_column="createdAt", db_index=True)

    class Meta:
        db_table = "house_officers"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.unit_assigned})"
