"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from barber_studio.api.studio_models import OptionsPayload, SignInPayload
from barber_studio.app_logging import configure_logging
from barber_studio.containers import AppContainer
from barber_studio.domain.errors import StudioError
from barber_studio.domain.images import EncodedImage
from barber_studio.domain.profiles import User
from barber_studio.domain.session import SessionState
from barber_studio.domain.styling import BeardStyle, Hairstyle, StylingOptions
from barber_studio.services.studio import StudioService


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.studio_service.restore()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(StudioError)
    async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
        logger.warning(
            "Studio request failed: path=%s", request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/studio/state")
    async def studio_state(request: Request) -> dict[str, object]:
        """Return the current session snapshot."""
        return _state_payload(_studio(request).state)

    @app.get("/studio/catalog")
    async def studio_catalog() -> dict[str, object]:
        """Return the selectable hairstyles, beard styles and default options."""
        return {
            "hairstyles": [style.value for style in Hairstyle],
            "beardStyles": [style.value for style in BeardStyle],
            "defaults": StylingOptions().to_record(),
        }

    @app.post("/studio/image")
    async def upload_image(request: Request) -> dict[str, object]:
        """Accept a raw image body as the new source photo."""
        content_type = request.headers.get("content-type", "")
        mime_type = content_type.split(";")[0].strip().lower()
        if not mime_type.startswith("image/"):
            raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)
        body = await request.body()
        return _state_payload(_studio(request).upload_image(body, mime_type))

    @app.put("/studio/options")
    async def update_options(
        payload: OptionsPayload, request: Request
    ) -> dict[str, object]:
        """Replace the styling options."""
        return _state_payload(_studio(request).set_options(payload.to_options()))

    @app.post("/studio/generate")
    async def generate(request: Request) -> dict[str, object]:
        """Run the AI styling for the current photo and options."""
        return _state_payload(await _studio(request).generate())

    @app.post("/studio/favorites")
    async def save_favorite(request: Request) -> dict[str, object]:
        """Save the generated look for the signed-in user."""
        return _state_payload(_studio(request).save_favorite())

    @app.get("/studio/export")
    async def export_look(request: Request) -> Response:
        """Download the generated look."""
        image = _studio(request).export_generated()
        if image is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        extension = image.mime_type.split("/")[-1]
        return Response(
            content=image.raw_bytes(),
            media_type=image.mime_type,
            headers={
                "Content-Disposition": f'attachment; filename="look.{extension}"'
            },
        )

    @app.post("/auth/sign-in")
    async def sign_in(payload: SignInPayload, request: Request) -> dict[str, object]:
        """Sign in with an email and optional display name."""
        return _state_payload(_studio(request).sign_in(payload.email, payload.name))

    @app.post("/auth/sign-out")
    async def sign_out(request: Request) -> dict[str, object]:
        """Sign out the current user."""
        return _state_payload(_studio(request).sign_out())

    return app


def _studio(request: Request) -> StudioService:
    container: AppContainer = request.app.state.container
    return container.studio_service


def _state_payload(state: SessionState) -> dict[str, object]:
    """Render a session snapshot with camelCase keys and data URLs."""
    return {
        "phase": state.phase.value,
        "originalImage": _image_url(state.original_image),
        "generatedImage": _image_url(state.generated_image),
        "isLoading": state.is_loading,
        "error": state.error,
        "options": state.options.to_record(),
        "currentUser": _user_payload(state.current_user),
        "favorites": [look.to_record() for look in state.favorites],
    }


def _image_url(image: EncodedImage | None) -> str | None:
    return image.to_data_url() if image is not None else None


def _user_payload(user: User | None) -> dict[str, str] | None:
    return user.to_record() if user is not None else None
