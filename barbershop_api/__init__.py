"""
Top-level package for the Barbershop Scheduling API.

This file makes ``barbershop_api`` a package so that modules within
``app`` can be imported using fully qualified names like
``barbershop_api.app.main``.  All functionality lives in submodules
under ``app``.
"""

__all__ = []
