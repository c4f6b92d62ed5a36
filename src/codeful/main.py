"""Application entrypoint - local aiohttp server for the chat view."""

import json
import logging
import math

import structlog
from aiohttp import web
from aiohttp.web import Application, Request, Response, StreamResponse, run_app

from codeful.chat.service import ChatService
from codeful.config import Settings, get_settings
from codeful.history.store import InMemoryChatStore
from codeful.render.code_block import CodeBlockPresenter
from codeful.render.document import render_text
from codeful.render.reveal import RevealController, RevealUnit


def configure_logging(
    log_level: str = "INFO",
    log_file: str = "",
    log_file_max_bytes: int = 10_485_760,
    log_file_backup_count: int = 5,
) -> None:
    """Configure structlog on top of standard library logging.

    Events go to stderr, and to a rotating file when ``log_file`` is set.
    File output is rendered as JSON lines, console output for humans.
    aiohttp's per-request access log is only shown at DEBUG level.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. Empty string = console only.
        log_file_max_bytes: Max size per log file before rotation (default: 10 MB)
        log_file_backup_count: Number of rotated backup files to keep (default: 5)
    """
    from logging.handlers import RotatingFileHandler
    from pathlib import Path

    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=log_file,
                maxBytes=log_file_max_bytes,
                backupCount=log_file_backup_count,
                encoding="utf-8",
            )
        )

    root_logger = logging.root
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)

    logging.getLogger("aiohttp.access").setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )

    renderer = structlog.processors.JSONRenderer() if log_file else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()

MAX_REVEAL_STEP_DELAY = 5.0


async def _read_json(request: Request) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise web.HTTPBadRequest(reason="Request body must be JSON")
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(reason="Request body must be a JSON object")
    return body


async def health(request: Request) -> Response:
    """Health check endpoint."""
    return web.json_response({"status": "healthy"})


async def send_message(request: Request) -> Response:
    service: ChatService = request.app["chat_service"]
    body = await _read_json(request)
    prompt = body.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise web.HTTPBadRequest(reason="'prompt' must be a non-empty string")

    turn = await service.send(request.match_info["chat_id"], prompt)
    return web.json_response(text=turn.model_dump_json())


async def list_chats(request: Request) -> Response:
    store: InMemoryChatStore = request.app["chat_store"]
    return web.json_response([
        {
            "id": record.id,
            "display_title": record.display_title,
            "last_message_at": record.last_message_at.isoformat(),
        }
        for record in store.list_chats()
    ])


async def get_chat(request: Request) -> Response:
    store: InMemoryChatStore = request.app["chat_store"]
    record = store.get(request.match_info["chat_id"])
    if record is None:
        raise web.HTTPNotFound(reason="Unknown chat")
    return web.json_response(text=record.model_dump_json())


async def delete_chat(request: Request) -> Response:
    store: InMemoryChatStore = request.app["chat_store"]
    if not store.delete(request.match_info["chat_id"]):
        raise web.HTTPNotFound(reason="Unknown chat")
    return Response(status=204)


async def clear_chats(request: Request) -> Response:
    store: InMemoryChatStore = request.app["chat_store"]
    return web.json_response({"deleted": store.clear()})


async def render_document(request: Request) -> Response:
    body = await _read_json(request)
    text = body.get("text")
    if not isinstance(text, str):
        raise web.HTTPBadRequest(reason="'text' must be a string")
    return web.json_response(text=render_text(text).model_dump_json())


async def reveal_document(request: Request) -> StreamResponse:
    """Stream reveal snapshots as newline-delimited JSON."""
    settings: Settings = request.app["settings"]
    body = await _read_json(request)
    text = body.get("text")
    if not isinstance(text, str):
        raise web.HTTPBadRequest(reason="'text' must be a string")

    try:
        step_delay = float(body.get("step_delay", settings.reveal_step_delay))
        if not math.isfinite(step_delay) or step_delay > MAX_REVEAL_STEP_DELAY:
            raise ValueError(
                f"step_delay must be between 0 and {MAX_REVEAL_STEP_DELAY} seconds"
            )
        controller = RevealController(
            text,
            step_delay=step_delay,
            unit=RevealUnit(body.get("unit", settings.reveal_unit)),
        )
    except (TypeError, ValueError) as e:
        raise web.HTTPBadRequest(reason=str(e))

    response = StreamResponse()
    response.content_type = "application/x-ndjson"
    await response.prepare(request)

    snapshots = 0
    try:
        async for snapshot in controller.stream():
            await response.write(snapshot.model_dump_json().encode("utf-8") + b"\n")
            snapshots += 1
    except ConnectionResetError:
        controller.cancel()
        logger.info("reveal_client_disconnected", snapshots=snapshots)
        return response

    await response.write_eof()
    logger.debug("reveal_stream_complete", snapshots=snapshots)
    return response


async def copy_code(request: Request) -> Response:
    service: ChatService = request.app["chat_service"]
    try:
        index = int(request.match_info["index"])
    except ValueError:
        raise web.HTTPBadRequest(reason="Code block index must be an integer")

    result = service.copy_code(
        request.match_info["chat_id"],
        request.match_info["message_id"],
        index,
    )
    if result is None:
        raise web.HTTPNotFound(reason="Unknown chat, message or code block")
    return web.json_response(result.model_dump())


def create_app(
    settings: Settings | None = None,
    presenter: CodeBlockPresenter | None = None,
) -> Application:
    """Create and configure the aiohttp application."""
    settings = settings or get_settings()

    store = InMemoryChatStore(ttl=settings.history_ttl, maxsize=settings.history_maxsize)

    # Model client (optional, falls back to echo mode)
    client = None
    if settings.groq_api_key:
        from codeful.llm.client import ChatClient

        client = ChatClient(settings)
        logger.info("llm_client_initialized", url=settings.groq_api_url, model=settings.model_name)
    else:
        logger.info("llm_client_disabled", reason="GROQ_API_KEY not set")

    service = ChatService(settings, store, client=client, presenter=presenter)

    app = Application()
    app["settings"] = settings
    app["chat_store"] = store
    app["chat_service"] = service

    if client is not None:
        async def close_client(app: Application) -> None:
            await client.close()

        app.on_cleanup.append(close_client)

    app.router.add_get("/health", health)
    app.router.add_get("/api/chats", list_chats)
    app.router.add_delete("/api/chats", clear_chats)
    app.router.add_get("/api/chats/{chat_id}", get_chat)
    app.router.add_delete("/api/chats/{chat_id}", delete_chat)
    app.router.add_post("/api/chats/{chat_id}/messages", send_message)
    app.router.add_post(
        "/api/chats/{chat_id}/messages/{message_id}/code/{index}/copy", copy_code
    )
    app.router.add_post("/api/render", render_document)
    app.router.add_post("/api/reveal", reveal_document)

    return app


def main() -> None:
    """Run the local view server."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_file_max_bytes=settings.log_file_max_bytes,
        log_file_backup_count=settings.log_file_backup_count,
    )

    logger.info(
        "starting_codeful_server",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )

    app = create_app(settings)
    run_app(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
