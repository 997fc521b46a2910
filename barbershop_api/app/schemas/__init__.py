"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored JSON records so that the API
representation can evolve independently of the files on disk.
"""
