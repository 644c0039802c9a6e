# ho_core/reports/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpResponse

from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import APIView

from ho_core.common.api.exceptions import ExportFailed
from ho_core.officers.api.views import validation_detail
from ho_core.officers.selectors import OfficerFilter, filter_officers, select_by_ids
from ho_core.officers.storage import get_record_store
from ho_core.reports.api.serializers import OfficersReportRequestSerializer
from ho_core.reports.services import ReportExportError, ReportService


class OfficersReportView(APIView):
    """
    POST /reports/officers/?unit=&gender=&search=&sortBy=&sortOrder=
    Returns the PDF as an attachment.
    """

    serializer_class = OfficersReportRequestSerializer

    def get_store(self):
        return get_record_store()

    def post(self, request):
        ser = OfficersReportRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            flt = OfficerFilter.from_params(request.query_params)
            officers = select_by_ids(filter_officers(self.get_store().load(), flt), data.get("ids"))
            report = ReportService.render_officers_report(
                officers=officers,
                signer=data["signer"],
                chart_image=data.get("chart_image") or None,
            )
        except DjangoValidationError as e:
            raise DRFValidationError(validation_detail(e))
        except ReportExportError as e:
            raise ExportFailed(str(e))

        response = HttpResponse(report.content, content_type=report.content_type)
        response["Content-Disposition"] = f'attachment; filename="{report.filename}"'
        return response
