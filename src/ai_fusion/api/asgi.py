"""ASGI entrypoint for the AI Fusion API."""

from ai_fusion.api.app import create_app
from ai_fusion.containers import build_container

app = create_app(build_container())
