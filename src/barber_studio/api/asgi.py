"""ASGI entrypoint for the barber studio API."""

from barber_studio.api.app import create_app
from barber_studio.containers import build_container

app = create_app(build_container())
