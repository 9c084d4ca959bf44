"""Prompt Gallery — FastAPI gateway layer.

This package contains the gateway application that holds the upstream
credential and relays generation requests to the image service.

Modules
-------
main
    Application factory, route handlers, exception handlers and the
    ``main()`` CLI entry point.
models
    Pydantic models for the request body and error responses.
"""
