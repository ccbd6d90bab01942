"""ASGI entrypoint for the CaloriTons API."""

from caloritons.api.app import create_app
from caloritons.containers import build_container

app = create_app(build_container())
