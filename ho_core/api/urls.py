# ho_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from ho_core.officers.api.views import OfficerViewSet
from ho_core.reports.api.views import OfficersReportView

router = DefaultRouter()
router.register(r"officers", OfficerViewSet, basename="officers")

urlpatterns = [
    # Auth
    path("auth/token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),

    # Reports (non-ViewSet endpoint)
    path("reports/officers/", OfficersReportView.as_view(), name="reports-officers"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
