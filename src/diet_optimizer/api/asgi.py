"""ASGI entrypoint for the diet optimizer API."""

from diet_optimizer.api.app import create_app
from diet_optimizer.containers import build_container

app = create_app(build_container())
