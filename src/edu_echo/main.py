"""ASGI entry point."""

from ddtrace import patch_all

from edu_echo.app import create_app

patch_all()

app = create_app()
