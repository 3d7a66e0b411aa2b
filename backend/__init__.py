"""
Fortune backend package.

This package provides a FastAPI application that serves short text
fortunes from an in-memory store, optionally mirrored to Redis so that
fortunes survive restarts of the service.
"""
