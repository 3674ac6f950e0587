"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, store handle, security),
``services`` (business logic), ``schemas`` (request and response models)
and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
