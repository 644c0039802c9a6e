import base64
from datetime import date
from unittest import mock

import pytest
from django.core.exceptions import ValidationError

from ho_core.officers.tests.fakes import make_record
from ho_core.reports.services import ReportExportError, ReportService

PNG_B64 = base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode("ascii")
TODAY = date(2025, 3, 1)


@pytest.fixture
def officers():
    return [
        make_record(full_name="Jane Doe", gender="Female", clinical_presentation_topic="Lupus nephritis",
                    clinical_presentation_date=date(2025, 3, 4)),
        make_record(full_name="John Roe", unit_assigned="Neurology"),
    ]


def test_context_summarises_the_given_officers(settings, officers):
    settings.OFFICERS_REPORT_HEADER = ("Hospital", "Department of Medicine")

    ctx = ReportService.build_context(officers=officers, signer="Dr. Ada", today=TODAY)

    assert ctx["header_lines"] == ("Hospital", "Department of Medicine")
    assert ctx["generated_on"] == "Mar 01, 2025"
    assert ctx["stats"].total == 2
    assert ctx["stats"].upcoming_presentations == 1
    assert ctx["unit_distribution"] == [("Nephrology", 1), ("Neurology", 1)]
    assert [r["full_name"] for r in ctx["rows"]] == ["Jane Doe", "John Roe"]
    assert ctx["rows"][1]["presentation_date"] == "-"
    assert ctx["rows"][0]["expected_sign_out"] == "Mar 26, 2025"
    assert [t["topic"] for t in ctx["topics"]] == ["Lupus nephritis"]
    assert ctx["chart_image"] is None


def test_chart_image_accepts_data_url_and_bare_base64(officers):
    from_url = ReportService.build_context(
        officers=officers, signer="x", chart_image=f"data:image/png;base64,{PNG_B64}", today=TODAY
    )
    bare = ReportService.build_context(officers=officers, signer="x", chart_image=PNG_B64, today=TODAY)

    assert from_url["chart_image"] == f"data:image/png;base64,{PNG_B64}"
    assert bare["chart_image"] == from_url["chart_image"]


@pytest.mark.parametrize("chart", ["data:text/plain;base64,aGk=", "not base64 at all!"])
def test_bad_chart_image_is_an_export_error(officers, chart):
    with pytest.raises(ReportExportError):
        ReportService.build_context(officers=officers, signer="x", chart_image=chart, today=TODAY)


def test_render_requires_signer(officers):
    with mock.patch("ho_core.reports.services.pdfkit.from_string") as from_string:
        with pytest.raises(ValidationError) as exc:
            ReportService.render_officers_report(officers=officers, signer="   ", today=TODAY)

    assert "signer" in exc.value.message_dict
    from_string.assert_not_called()


def test_render_produces_named_pdf(settings, officers):
    settings.OFFICERS_REPORT_ATTRIBUTION = "Department of Medicine"
    settings.WKHTMLTOPDF_CMD = ""

    with mock.patch("ho_core.reports.services.pdfkit.from_string", return_value=b"%PDF-1.4") as from_string:
        report = ReportService.render_officers_report(officers=officers, signer="Dr. Ada", today=TODAY)

    assert report.filename == "House_Officers_Clinical_Flow_2025-03-01.pdf"
    assert report.content == b"%PDF-1.4"
    assert report.content_type == "application/pdf"

    html, output = from_string.call_args.args
    assert output is False
    assert "Downloaded by: Dr. Ada" in html
    assert "Jane Doe" in html and "Lupus nephritis" in html
    options = from_string.call_args.kwargs["options"]
    assert options["footer-center"] == "Department of Medicine"
    assert options["footer-right"] == "Page [page] of [topage]"


def test_renderer_failure_is_an_export_error(officers):
    with mock.patch("ho_core.reports.services.pdfkit.from_string", side_effect=OSError("wkhtmltopdf not found")):
        with pytest.raises(ReportExportError, match="wkhtmltopdf not found"):
            ReportService.render_officers_report(officers=officers, signer="Dr. Ada", today=TODAY)


def test_empty_document_is_an_export_error(officers):
    with mock.patch("ho_core.reports.services.pdfkit.from_string", return_value=b""):
        with pytest.raises(ReportExportError):
            ReportService.render_officers_report(officers=officers, signer="Dr. Ada", today=TODAY)
