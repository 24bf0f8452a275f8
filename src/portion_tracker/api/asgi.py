"""ASGI entrypoint for the reference portions backend."""

from portion_tracker.api.app import create_app

app = create_app()
