"""
Application package initializer.

The API is organised in layers: ``core`` (configuration, logging,
errors and the JSON record store), ``schemas`` (request/response
models), ``services`` (business rules) and ``api`` (versioned
routers).
"""

from .main import app  # noqa: F401
