"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import quote

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from starlette.datastructures import FormData, UploadFile

from portfolio_site.api.pages import router as pages_router
from portfolio_site.app_logging import configure_logging
from portfolio_site.containers import AppContainer
from portfolio_site.domain.background import BackgroundPointer
from portfolio_site.services.errors import UploadRejectedError
from portfolio_site.services.visits import VISITOR_COOKIE, VISITOR_COOKIE_MAX_AGE

NO_STORE = "no-cache, no-store, must-revalidate"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(pages_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/upload")
    async def upload(request: Request) -> Response:
        """Publish an uploaded photo as the new site background."""
        state_container: AppContainer = request.app.state.container
        try:
            form = await request.form()
            file = _form_file(form, "file")
            data = await file.read() if file else None
            pointer = await state_container.background_service.publish_upload(
                data, file.content_type if file else None
            )
        except UploadRejectedError as exc:
            return PlainTextResponse(str(exc), status_code=exc.status_code)
        except Exception as exc:
            logger.exception("Background upload failed")
            return PlainTextResponse(str(exc) or "Upload failed", status_code=500)
        return JSONResponse({"ok": True, "version": pointer.version})

    @app.post("/api/upload-video-chunk")
    async def upload_video_chunk(request: Request) -> Response:
        """Store one segment of a continuous backup recording."""
        state_container: AppContainer = request.app.state.container
        session: str | None = None
        index: str | None = None
        try:
            form = await request.form()
            file = _form_file(form, "file")
            session = _form_text(form, "session")
            index = _form_text(form, "idx")
            media_type = _form_text(form, "type") or (
                file.content_type if file else None
            )
            data = await file.read() if file else None
            stored = state_container.video_chunk_service.store_chunk(
                data, session, index, media_type
            )
        except UploadRejectedError as exc:
            return PlainTextResponse(str(exc), status_code=exc.status_code)
        except Exception as exc:
            logger.exception(
                "Video chunk upload failed",
                extra={"session": session, "idx": index},
            )
            return PlainTextResponse(str(exc) or "upload failed", status_code=500)
        return JSONResponse(
            {"ok": True, "url": stored.url, "pathname": stored.pathname}
        )

    @app.get("/bg")
    async def background(request: Request) -> Response:
        """Redirect to the current background image."""
        state_container: AppContainer = request.app.state.container
        try:
            pointer = await state_container.background_service.current()
        except Exception:
            logger.exception("Failed to read background pointer")
            return PlainTextResponse("Error fetching background", status_code=500)
        if pointer is None:
            return PlainTextResponse("No background yet", status_code=404)
        return _background_redirect(pointer)

    @app.get("/api/bg")
    async def api_background(request: Request) -> Response:
        """Alternate background resolver."""
        state_container: AppContainer = request.app.state.container
        try:
            pointer = await state_container.background_service.current()
        except Exception:
            logger.exception("Failed to read background pointer")
            return PlainTextResponse("Error fetching background", status_code=500)
        if pointer is None:
            return PlainTextResponse("No background image found", status_code=404)
        return _background_redirect(pointer)

    @app.get("/api/pv")
    async def pageviews(request: Request) -> Response:
        """Record a visit and report pageview and unique-visitor counts."""
        state_container: AppContainer = request.app.state.container
        try:
            result = await state_container.visit_service.record_visit(
                visitor_id=request.cookies.get(VISITOR_COOKIE),
                user_agent=request.headers.get("user-agent"),
            )
        except Exception as exc:
            logger.exception("Failed to record visit")
            return PlainTextResponse(str(exc) or "counter failed", status_code=500)
        response = JSONResponse({"pv": result.counts.pv, "uv": result.counts.uv})
        if result.is_new_visitor:
            response.set_cookie(
                VISITOR_COOKIE,
                result.visitor_id,
                max_age=VISITOR_COOKIE_MAX_AGE,
                path="/",
                samesite="lax",
                httponly=True,
            )
        return response

    return app


def _form_file(form: FormData, name: str) -> UploadFile | None:
    value = form.get(name)
    return value if isinstance(value, UploadFile) else None


def _form_text(form: FormData, name: str) -> str | None:
    value = form.get(name)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _background_redirect(pointer: BackgroundPointer) -> RedirectResponse:
    """Redirect to a version-busted URL; the redirect itself is never cached."""
    separator = "&" if "?" in pointer.url else "?"
    target = f"{pointer.url}{separator}v={quote(str(pointer.version))}"
    return RedirectResponse(
        target,
        status_code=302,
        headers={"Cache-Control": NO_STORE},
    )
