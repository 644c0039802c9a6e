from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

from ho_core.common.api.exceptions import ensure_request_id


class RequestIdMiddleware(MiddlewareMixin):
    """
    Attaches request.request_id (honouring an incoming X-Request-Id) and echoes it back,
    so the id in an error envelope can be matched with server logs.
    """

    HEADER_META_KEY = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-Id"
    MAX_LENGTH = 64

    def process_request(self, request):
        incoming = (request.META.get(self.HEADER_META_KEY) or "").strip()
        if incoming and len(incoming) <= self.MAX_LENGTH:
            request.request_id = incoming
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[self.RESPONSE_HEADER] = rid
        return response
