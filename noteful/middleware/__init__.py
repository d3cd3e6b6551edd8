# Middleware package init
"""
Noteful API — Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every log record
    written while handling the request can carry the same correlation id.
    Authentication is not middleware: it is a route dependency, so /health
    and the signup/login routes stay public.
"""
