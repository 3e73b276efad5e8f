"""
CORS middleware that answers refused preflights with 403 instead of 400, so a
cross-origin rejection is distinguishable from a bad request.
"""

from __future__ import annotations

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware as _StarletteCORSMiddleware
from starlette.responses import Response

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]
ALLOWED_HEADERS = ["content-type"]


class CORSMiddleware(_StarletteCORSMiddleware):
    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code == 400:
            response.status_code = 403
        return response
