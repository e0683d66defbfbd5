"""
Application package initializer.

``core`` holds configuration, logging and the JSON record store,
``schemas`` the pydantic models, ``services`` the record operations and
``api`` the FastAPI routers that expose them.
"""

from .main import app  # noqa: F401
