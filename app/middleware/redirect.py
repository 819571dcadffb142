"""Redirect middleware sending every non-POST request to the repository page."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.config import settings

# Paths served normally for any method
_EXEMPT_PATHS = ("/healthz",)


class NonPostRedirectMiddleware(BaseHTTPMiddleware):
    """Answer any method other than POST with a 302 to ``settings.repository_url``.

    Behaviour:
    - ``/healthz`` is always exempt.
    - Every other path, including methods routing knows nothing about
      (TRACE, CONNECT, custom verbs), is redirected before authentication.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "POST" or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        return RedirectResponse(settings.repository_url, status_code=302)
