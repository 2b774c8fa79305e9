"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, database, logging, security, errors),
``repositories`` (SQL access for enrollments and addresses),
``services`` (business rules, including the ViaCEP lookup client),
``schemas`` (pydantic payloads) and ``api/v1`` (HTTP routes).
"""

from .main import app  # noqa: F401
