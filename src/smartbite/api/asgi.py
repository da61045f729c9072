"""ASGI entrypoint for the SmartBite API."""

from smartbite.api.app import create_app
from smartbite.containers import build_container

app = create_app(build_container())
