# ho_core/officers/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError as DRFValidationError
from rest_framework.response import Response

from ho_core.officers.api.serializers import (
    CalendarLinkSerializer,
    OfficerCreateSerializer,
    OfficerSerializer,
    OfficerStatsSerializer,
    OfficerUpdateSerializer,
    PriorityAllocationSerializer,
    TimelineEntrySerializer,
)
from ho_core.officers.calendar import CalendarDateMissing, build_bulk_calendar_links, build_calendar_link
from ho_core.officers.constants import EventKind
from ho_core.officers.selectors import (
    OfficerFilter,
    build_timeline,
    compute_stats,
    filter_officers,
    priority_allocation,
)
from ho_core.officers.services import OfficerService
from ho_core.officers.storage import get_record_store


def validation_detail(e: DjangoValidationError):
    if hasattr(e, "message_dict"):
        return e.message_dict
    return {"detail": " ".join(e.messages)}


class OfficerViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - validation mapping
    - calls selectors for reads
    - calls OfficerService for writes
    """

    serializer_class = OfficerSerializer
    lookup_value_regex = "[^/]+"

    def get_store(self):
        return get_record_store()

    def _filter(self, request) -> OfficerFilter:
        try:
            return OfficerFilter.from_params(request.query_params)
        except DjangoValidationError as e:
            raise DRFValidationError(validation_detail(e))

    def _get_record(self, pk):
        record = self.get_store().get(str(pk))
        if record is None:
            raise NotFound("Officer not found.")
        return record

    # ----------------------------
    # Reads
    # ----------------------------
    def list(self, request):
        flt = self._filter(request)
        records = filter_officers(self.get_store().load(), flt)
        return Response(OfficerSerializer(records, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(OfficerSerializer(self._get_record(pk)).data)

    @action(detail=False, methods=["get"])
    def dashboard(self, request):
        """
        Filtered view + statistics of the filtered view. Priority allocation is
        computed from the full record set, not the filtered one.
        """
        flt = self._filter(request)
        all_records = self.get_store().load()
        view = filter_officers(all_records, flt)

        return Response(
            {
                "results": OfficerSerializer(view, many=True).data,
                "stats": OfficerStatsSerializer(compute_stats(view)).data,
                "priorityAllocation": PriorityAllocationSerializer(priority_allocation(all_records)).data,
            }
        )

    @action(detail=False, methods=["get"], url_path="priority-allocation")
    def allocation(self, request):
        return Response(PriorityAllocationSerializer(priority_allocation(self.get_store().load())).data)

    @action(detail=False, methods=["get"])
    def timeline(self, request):
        flt = self._filter(request)
        kind = request.query_params.get("kind") or EventKind.SIGNOUT
        try:
            entries = build_timeline(filter_officers(self.get_store().load(), flt), kind)
        except DjangoValidationError as e:
            raise DRFValidationError(validation_detail(e))
        return Response(TimelineEntrySerializer(entries, many=True).data)

    @action(detail=True, methods=["get"], url_path="calendar-link")
    def calendar_link(self, request, pk=None):
        record = self._get_record(pk)
        kind = request.query_params.get("kind") or ""
        if kind not in EventKind.values:
            raise DRFValidationError({"kind": f"kind is invalid. Allowed: {EventKind.values}"})
        try:
            link = build_calendar_link(record, kind)
        except CalendarDateMissing as e:
            raise DRFValidationError({"detail": str(e)})
        return Response(CalendarLinkSerializer(link).data)

    @action(detail=False, methods=["get"], url_path="calendar-links")
    def calendar_links(self, request):
        flt = self._filter(request)
        links = build_bulk_calendar_links(filter_officers(self.get_store().load(), flt))
        return Response(CalendarLinkSerializer(links, many=True).data)

    # ----------------------------
    # Writes
    # ----------------------------
    def create(self, request):
        ser = OfficerCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            record = OfficerService.create_officer(store=self.get_store(), **ser.validated_data)
        except DjangoValidationError as e:
            raise DRFValidationError(validation_detail(e))

        return Response(OfficerSerializer(record).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        ser = OfficerUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        try:
            record = OfficerService.update_officer(
                officer_id=str(pk),
                data=ser.validated_data,
                store=self.get_store(),
            )
        except OfficerService.NotFound:
            raise NotFound("Officer not found.")
        except DjangoValidationError as e:
            raise DRFValidationError(validation_detail(e))

        return Response(OfficerSerializer(record).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        try:
            OfficerService.delete_officer(officer_id=str(pk), store=self.get_store())
        except OfficerService.NotFound:
            raise NotFound("Officer not found.")
        return Response(status=status.HTTP_204_NO_CONTENT)
