# Middleware package init
"""
Catalog Backend - Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → [Trailing Slash] → Route Handler

    Request ID runs first so the access log line already carries the ID.
    Responses pass back through the chain in reverse, which is where the
    logging middleware reads the status code and duration.
"""
