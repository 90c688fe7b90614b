# Middleware package init
"""
ENotebook Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
    3. GZip / CORS: Starlette built-ins

    The order is reversed for responses, so the X-Request-ID header is set
    last and the access log sees the final status code.

Authentication is NOT middleware: it is a route dependency
(enotebook.dependencies) so public routes never pay for it.
"""
