# Middleware package init
"""
Hub Foundation: Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log and the exception handlers can
    tag their output with it. The access log sees the final status code,
    including the ones produced by the exception handlers.
"""
