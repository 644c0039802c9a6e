# ho_core/officers/constants.py
from __future__ import annotations

from dataclasses import dataclass

from django.db import models


# Fixed rotation length: 12 calendar weeks, never "3 months".
ROTATION_WEEKS = 12

UPCOMING_WINDOW_DAYS = 7


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"


class Unit(models.TextChoices):
    CARDIOLOGY_1 = "Cardiology 1", "Cardiology 1"
    CARDIOLOGY_2 = "Cardiology 2", "Cardiology 2"
    NEPHROLOGY = "Nephrology", "Nephrology"
    NEUROLOGY = "Neurology", "Neurology"
    ENDOCRINOLOGY = "Endocrinology", "Endocrinology"
    PULMONOLOGY = "Pulmonology", "Pulmonology"
    GASTROENTEROLOGY = "Gastroenterology", "Gastroenterology"
    INFECTIOUS_DISEASE_DERMATOLOGY = "Infectious Disease/Dermatology", "Infectious Disease/Dermatology"
    RHEUMATOLOGY = "Rheumatology", "Rheumatology"


class TimelineColor(models.TextChoices):
    URGENT = "urgent", "Urgent"
    WARNING = "warning", "Warning"
    OK = "ok", "OK"
    PAST = "past", "Past"


class EventKind(models.TextChoices):
    PRESENTATION = "presentation", "Clinical presentation"
    SIGNOUT = "signout", "Sign out"


# Wire names of the sortable fields, as the dashboard sends them.
SORT_FIELDS = ("fullName", "dateSignedIn", "clinicalPresentationDate", "expectedSignOutDate")
SORT_ORDERS = ("asc", "desc")

# Filter value meaning "no constraint".
ANY = "any"


@dataclass(frozen=True)
class PriorityUnit:
    name: str
    required: int
    priority: int


PRIORITY_UNITS: tuple[PriorityUnit, ...] = (
    PriorityUnit(name=Unit.NEPHROLOGY, required=3, priority=1),
    PriorityUnit(name=Unit.NEUROLOGY, required=2, priority=2),
    PriorityUnit(name=Unit.ENDOCRINOLOGY, required=2, priority=3),
    PriorityUnit(name=Unit.GASTROENTEROLOGY, required=2, priority=4),
)
