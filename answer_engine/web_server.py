"""HTTP server exposing the question answering pipeline."""

import logging
from typing import Any

from aiohttp import web

from answer_engine.errors import BadRequestError, BaseError
from answer_engine.logs import QueryLogger
from answer_engine.logs.models import LOG_ENTRY_TYPES
from answer_engine.query import QueryProcessor

logger = logging.getLogger(__name__)

PROCESSOR_KEY = web.AppKey("processor", QueryProcessor)
QUERY_LOGGER_KEY = web.AppKey("query_logger", QueryLogger)


def _error_response(status: int, code: str, message: str, data: Any = None) -> web.Response:
    error: dict[str, Any] = {"code": code, "message": message}
    if data:
        error["data"] = data
    return web.json_response({"success": False, "error": error}, status=status)


def _ok(data: Any, message: str | None = None) -> web.Response:
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return web.json_response(body)


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Render every failure as a structured error body."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except BaseError as e:
        if e.status >= 500:
            logger.error(
                f"Request failed: {e.message}",
                exc_info=True,
                extra={"path": request.path, "method": request.method},
            )
            return _error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")

        logger.info(f"{request.method} {request.path} -> {e.status} {e.code}: {e.message}")
        return _error_response(e.status, e.code, e.message, e.data)
    except Exception as e:
        logger.error(
            f"Oops! Something went wrong: {e}",
            exc_info=True,
            extra={"path": request.path, "method": request.method},
        )
        return _error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")


async def handle_root(request: web.Request) -> web.Response:
    return web.json_response({"service": "answer-engine", "status": "running"})


async def handle_health(request: web.Request) -> web.Response:
    """Health check endpoint."""
    health = await request.app[PROCESSOR_KEY].health_check()
    status = 200 if health["overall"] else 503
    return web.json_response({"status": "healthy" if health["overall"] else "degraded", **health}, status=status)


async def handle_query(request: web.Request) -> web.Response:
    """
    Answer a question.

    Expects JSON: {"query": "...", "options": {"useInternet": false, ...}}
    """
    try:
        body = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise BadRequestError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")

    options = body.get("options")
    if options is not None and not isinstance(options, dict):
        raise BadRequestError("Field options must be an object")

    result = await request.app[PROCESSOR_KEY].process_query(body.get("query"), options)

    return _ok(
        {
            "answer": result.answer,
            "contextSource": result.context_source.value,
            "failedSources": [source.value for source in result.failed_sources],
        },
        "Query executed successfully",
    )


async def handle_logs(request: web.Request) -> web.Response:
    """List query log entries, newest first."""
    filters: dict[str, Any] = {}

    entry_type = request.query.get("type")
    if entry_type:
        if entry_type not in LOG_ENTRY_TYPES:
            raise BadRequestError(f"Unknown log type '{entry_type}'")
        filters["type"] = entry_type

    success = request.query.get("success")
    if success is not None:
        if success.lower() not in ("true", "false"):
            raise BadRequestError("Parameter success must be true or false")
        filters["success"] = success.lower() == "true"

    limit = None
    if "limit" in request.query:
        try:
            limit = int(request.query["limit"])
        except ValueError:
            raise BadRequestError("Parameter limit must be an integer")
        if limit < 1:
            raise BadRequestError("Parameter limit must be positive")

    entries = await request.app[QUERY_LOGGER_KEY].get_logs(filters, limit)
    return _ok([entry.model_dump(mode="json") for entry in entries])


def create_app(processor: QueryProcessor, query_logger: QueryLogger) -> web.Application:
    """Build the aiohttp application around an already wired processor."""
    app = web.Application(middlewares=[error_middleware])
    app[PROCESSOR_KEY] = processor
    app[QUERY_LOGGER_KEY] = query_logger

    app.router.add_get("/", handle_root)
    app.router.add_get("/health", handle_health)
    app.router.add_post("/api/query", handle_query)
    app.router.add_get("/api/query/logs", handle_logs)
    logger.info("Routes configured: /, /health, /api/query, /api/query/logs")
    return app


class WebServer:
    """HTTP server wrapper handling start and stop."""

    def __init__(self, app: web.Application, host: str = "0.0.0.0", port: int = 3000):
        """Initialize web server."""
        self.app = app
        self.host = host
        self.port = port
        self.runner: web.AppRunner | None = None

    async def start(self) -> web.AppRunner:
        """Start the web server."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        site = web.TCPSite(self.runner, self.host, self.port)
        await site.start()
        logger.info(f"Web server started on {self.host}:{self.port}")
        logger.info(f"Query endpoint: http://localhost:{self.port}/api/query")
        return self.runner

    async def stop(self) -> None:
        """Stop the web server."""
        if self.runner is not None:
            await self.runner.cleanup()
            self.runner = None
        logger.info("Web server stopped")
