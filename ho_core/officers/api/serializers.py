# ho_core/officers/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ho_core.officers.constants import EventKind
from ho_core.officers.dates import is_upcoming


class OfficerCreateSerializer(serializers.Serializer):
    """
    Shape-only checks; domain rules (units, genders, date formats) live in OfficerService.
    Dates are accepted as 'YYYY-MM-DD' strings; an empty presentation date means unset.
    """
    fullName = serializers.CharField(source="full_name", max_length=255, allow_blank=True)
    gender = serializers.CharField(max_length=16, allow_blank=True)
    dateSignedIn = serializers.CharField(source="date_signed_in", max_length=32, allow_blank=True)
    unitAssigned = serializers.CharField(source="unit_assigned", max_length=64, allow_blank=True)
    clinicalPresentationTopic = serializers.CharField(
        source="clinical_presentation_topic", max_length=255, required=False, allow_blank=True, default=""
    )
    clinicalPresentationDate = serializers.CharField(
        source="clinical_presentation_date", max_length=32, required=False, allow_blank=True, allow_null=True,
        default="",
    )


class OfficerUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH). expectedSignOutDate is not accepted: it follows dateSignedIn.
    """
    fullName = serializers.CharField(source="full_name", max_length=255, required=False, allow_blank=True)
    gender = serializers.CharField(max_length=16, required=False, allow_blank=True)
    dateSignedIn = serializers.CharField(source="date_signed_in", max_length=32, required=False, allow_blank=True)
    unitAssigned = serializers.CharField(source="unit_assigned", max_length=64, required=False, allow_blank=True)
    clinicalPresentationTopic = serializers.CharField(
        source="clinical_presentation_topic", max_length=255, required=False, allow_blank=True
    )
    clinicalPresentationDate = serializers.CharField(
        source="clinical_presentation_date", max_length=32, required=False, allow_blank=True, allow_null=True
    )

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class OfficerSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    fullName = serializers.CharField(source="full_name", read_only=True)
    gender = serializers.CharField(read_only=True)
    dateSignedIn = serializers.DateField(source="date_signed_in", read_only=True)
    unitAssigned = serializers.CharField(source="unit_assigned", read_only=True)
    clinicalPresentationTopic = serializers.CharField(source="clinical_presentation_topic", read_only=True)
    clinicalPresentationDate = serializers.DateField(source="clinical_presentation_date", read_only=True)
    expectedSignOutDate = serializers.DateField(source="expected_sign_out_date", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    presentationUpcoming = serializers.SerializerMethodField()
    signOutUpcoming = serializers.SerializerMethodField()

    def get_presentationUpcoming(self, obj) -> bool:
        return is_upcoming(obj.clinical_presentation_date, today=self.context.get("today"))

    def get_signOutUpcoming(self, obj) -> bool:
        return is_upcoming(obj.expected_sign_out_date, today=self.context.get("today"))


class OfficerStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    male = serializers.IntegerField()
    female = serializers.IntegerField()
    upcomingPresentations = serializers.IntegerField(source="upcoming_presentations")
    upcomingSignOuts = serializers.IntegerField(source="upcoming_sign_outs")
    unitDistribution = serializers.DictField(source="unit_distribution", child=serializers.IntegerField())


class PriorityUnitStatusSerializer(serializers.Serializer):
    name = serializers.CharField()
    priority = serializers.IntegerField()
    required = serializers.IntegerField()
    assigned = serializers.IntegerField()
    shortage = serializers.IntegerField()
    isComplete = serializers.BooleanField(source="is_complete")
    progress = serializers.FloatField()
    officers = serializers.ListField(child=serializers.CharField())


class PriorityAllocationSerializer(serializers.Serializer):
    units = PriorityUnitStatusSerializer(many=True)
    totalRequired = serializers.IntegerField(source="total_required")
    totalAssigned = serializers.IntegerField(source="total_assigned")
    completionPercentage = serializers.IntegerField(source="completion_percentage")


class TimelineEntrySerializer(serializers.Serializer):
    officer = OfficerSerializer()
    targetDate = serializers.DateField(source="target_date")
    daysUntil = serializers.IntegerField(source="days_until")
    color = serializers.CharField()
    progress = serializers.FloatField()


class CalendarLinkSerializer(serializers.Serializer):
    officerId = serializers.CharField(source="officer_id")
    kind = serializers.ChoiceField(choices=EventKind.choices)
    url = serializers.URLField()
