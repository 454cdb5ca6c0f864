import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID.

    The ID comes from the ``X-Request-ID`` header or is a fresh UUID4.  It
    is bound into structlog's context variables so every log line emitted
    while serving the request carries it, and it is echoed back in the
    ``X-Request-ID`` response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        log = logger.bind(method=request.method, path=request.get_full_path())
        log.info("request.started")

        response = self.get_response(request)

        log.info("request.finished", status_code=response.status_code)

        response["X-Request-ID"] = cid
        return response
