# ho_core/reports/services.py
from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import pdfkit
from django.conf import settings
from django.core.exceptions import ValidationError
from django.template.loader import render_to_string
from django.utils import timezone

from ho_core.officers.dates import format_date
from ho_core.officers.records import OfficerRecord
from ho_core.officers.selectors import compute_stats

logger = logging.getLogger("reports_service")

REPORT_TEMPLATE = "reports/officers_report.html"


class ReportExportError(Exception):
    """The document could not be produced; carries a message fit for the user."""


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


def _decode_chart_image(chart_image: Optional[str]) -> Optional[str]:
    """
    Accepts a PNG as a data URL or bare base64 and returns a data URL for the template.
    """
    if not chart_image:
        return None

    payload = chart_image.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if ";base64" not in header or not header.startswith("data:image/"):
            raise ReportExportError("Chart image must be a base64 encoded image data URL.")
        mime = header[len("data:"):].split(";", 1)[0]
    else:
        mime = "image/png"

    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ReportExportError("Chart image could not be decoded.")

    return f"data:{mime};base64,{payload}"


def _pdf_options() -> dict:
    return {
        "page-size": "A4",
        "encoding": "UTF-8",
        "orientation": "Portrait",
        "footer-center": getattr(settings, "OFFICERS_REPORT_ATTRIBUTION", ""),
        "footer-right": "Page [page] of [topage]",
        "footer-font-size": "8",
        "quiet": None,
    }


def _pdf_configuration():
    cmd = getattr(settings, "WKHTMLTOPDF_CMD", "")
    if cmd:
        return pdfkit.configuration(wkhtmltopdf=cmd)
    return None


class ReportService:
    """
    Officer report export.

    Validation (signer) happens before anything is rendered; rendering happens in
    memory, so a failure leaves nothing behind.
    """

    @staticmethod
    def build_context(
        *,
        officers: Sequence[OfficerRecord],
        signer: str,
        chart_image: Optional[str] = None,
        today: Optional[date] = None,
    ) -> dict:
        today = today or timezone.localdate()
        stats = compute_stats(officers, today=today)

        rows = [
            {
                "index": i,
                "full_name": o.full_name,
                "gender": o.gender,
                "unit": o.unit_assigned,
                "date_signed_in": format_date(o.date_signed_in),
                "presentation_date": format_date(o.clinical_presentation_date) or "-",
                "expected_sign_out": format_date(o.expected_sign_out_date),
            }
            for i, o in enumerate(officers, start=1)
        ]
        topics = [
            {
                "full_name": o.full_name,
                "unit": o.unit_assigned,
                "topic": o.clinical_presentation_topic,
                "presentation_date": format_date(o.clinical_presentation_date) or "Not scheduled",
            }
            for o in officers
            if o.clinical_presentation_topic
        ]

        return {
            "header_lines": getattr(settings, "OFFICERS_REPORT_HEADER", ()),
            "generated_on": format_date(today),
            "signer": signer,
            "stats": stats,
            "unit_distribution": sorted(stats.unit_distribution.items()),
            "chart_image": _decode_chart_image(chart_image),
            "rows": rows,
            "topics": topics,
            "attribution": getattr(settings, "OFFICERS_REPORT_ATTRIBUTION", ""),
        }

    @staticmethod
    def render_officers_report(
        *,
        officers: Sequence[OfficerRecord],
        signer: str,
        chart_image: Optional[str] = None,
        today: Optional[date] = None,
    ) -> RenderedReport:
        signer = (signer or "").strip()
        if not signer:
            raise ValidationError({"signer": "Please enter your full name as signature."})

        today = today or timezone.localdate()
        context = ReportService.build_context(officers=officers, signer=signer, chart_image=chart_image, today=today)
        html = render_to_string(REPORT_TEMPLATE, context)

        try:
            content = pdfkit.from_string(html, False, options=_pdf_options(), configuration=_pdf_configuration())
        except OSError as e:
            logger.error("PDF rendering failed: %s", e)
            raise ReportExportError(f"PDF generation failed: {e}")

        if not content:
            raise ReportExportError("PDF generation produced an empty document.")

        logger.info("Officer report rendered: %d officers, signed by %s", len(officers), signer)
        return RenderedReport(
            filename=f"House_Officers_Clinical_Flow_{today.isoformat()}.pdf",
            content=content,
        )
