# ho_core/reports/api/serializers.py
from __future__ import annotations

from rest_framework import serializers


class OfficersReportRequestSerializer(serializers.Serializer):
    """
    POST body for the officers PDF. The filtered view comes from the query string,
    exactly as for the officer list; `ids` narrows it to a selection.
    """
    signer = serializers.CharField(max_length=255, allow_blank=True, trim_whitespace=True)
    ids = serializers.ListField(child=serializers.CharField(max_length=64), required=False, default=list)
    chartImage = serializers.CharField(source="chart_image", required=False, allow_blank=True, default="")
