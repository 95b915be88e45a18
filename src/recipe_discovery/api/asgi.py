"""ASGI entrypoint for the recipe discovery API."""

from recipe_discovery.api.app import create_app
from recipe_discovery.containers import build_container

app = create_app(build_container())
