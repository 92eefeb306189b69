"""ASGI entrypoint for the photo album API."""

from photo_album.api.app import create_app
from photo_album.containers import build_container

app = create_app(build_container())
