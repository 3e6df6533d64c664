import logging
from time import perf_counter
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars
from starlette.types import ASGIApp, Message, Receive, Scope, Send

request_logger = structlog.stdlib.get_logger("infra.web.request")
fallback_logger = logging.getLogger(__name__)


class RequestEventLogMiddleware:
    """Emits one ``http_request_summary`` event per HTTP request.

    The request id is taken from ``request_id_header`` when the caller sends one, generated
    otherwise, bound into the structlog context for the lifetime of the request and echoed on
    the response. Paths ending with one of ``excluded_path_suffixes`` pass through untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        request_id_header: str = "x-request-id",
        excluded_path_suffixes: set[str] | None = None,
    ) -> None:
        self.app = app
        self.request_id_header = request_id_header.lower()
        self.excluded_path_suffixes = excluded_path_suffixes or set()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = str(scope.get("path", ""))
        if any(path.endswith(suffix) for suffix in self.excluded_path_suffixes):
            await self.app(scope, receive, send)
            return

        started_at = perf_counter()
        method = str(scope.get("method", ""))
        request_id = self._extract_header(scope, self.request_id_header) or str(uuid4())
        response_status_code: int | None = None

        bind_contextvars(request_id=request_id, http_method=method, http_path=path)

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status_code

            if message["type"] == "http.response.start":
                response_status_code = int(message.get("status", 200))

                header_key = self.request_id_header.encode("latin-1")
                headers = [item for item in message.get("headers", []) if item[0].lower() != header_key]
                headers.append((header_key, request_id.encode("latin-1")))

                message = {**message, "headers": headers}

            await send(message)

        payload: dict[str, object] = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "client_ip": scope["client"][0] if scope.get("client") else None,
            "user_agent": self._extract_header(scope, "user-agent"),
        }

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as error:
            if response_status_code is None:
                await send_wrapper({"type": "http.response.start", "status": 500, "headers": []})
                await send_wrapper(
                    {
                        "type": "http.response.body",
                        "body": b"Internal Server Error",
                        "more_body": False,
                    }
                )

            payload.update(
                status_code=response_status_code or 500,
                outcome="unhandled_exception",
                duration_ms=self._elapsed_ms(started_at),
                error={"error_class": error.__class__.__name__, "error_message": str(error)},
            )
            self._log_summary(logging.ERROR, had_exception=True, payload=payload)
            raise
        else:
            status_code = response_status_code or 200

            payload.update(
                status_code=status_code,
                outcome=self._status_to_outcome(status_code),
                duration_ms=self._elapsed_ms(started_at),
            )
            self._log_summary(self._status_to_log_level(status_code), had_exception=False, payload=payload)
        finally:
            clear_contextvars()

    def _extract_header(self, scope: Scope, header_name: str) -> str | None:
        lookup = header_name.lower()

        for raw_key, raw_value in scope.get("headers", []):
            if raw_key.decode("latin-1").lower() == lookup:
                return raw_value.decode("latin-1")

        return None

    def _elapsed_ms(self, started_at: float) -> float:
        return round((perf_counter() - started_at) * 1000, 3)

    def _status_to_log_level(self, status_code: int) -> int:
        if status_code < 400:
            return logging.INFO

        if status_code < 500:
            return logging.WARNING

        return logging.ERROR

    def _status_to_outcome(self, status_code: int) -> str:
        if status_code < 400:
            return "success"

        if status_code < 500:
            return "client_error"

        return "server_error"

    def _log_summary(self, log_level: int, *, had_exception: bool, payload: dict[str, object]) -> None:
        try:
            if had_exception:
                request_logger.exception("http_request_summary", **payload)
            elif log_level >= logging.ERROR:
                request_logger.error("http_request_summary", **payload)
            elif log_level >= logging.WARNING:
                request_logger.warning("http_request_summary", **payload)
            else:
                request_logger.info("http_request_summary", **payload)
        except Exception:
            fallback_logger.exception("Failed to emit request summary log")
