# Middleware package init
"""
Notes API — Middleware Package
==============================

What:  Cross-cutting concerns applied to every request, plus the request
       validation dependency used by the routes.

Middleware Chain (order matters!):
    Request → [Request ID] → [Timing & Logging] → [Rate Limit]
            → [Payload Size] → [Security Headers] → [GZip] → [CORS] → Route

    Why this order:
    1. Request ID first: every response, including rejections, carries X-Request-ID
    2. Timing & Logging: records status and duration of everything below it
    3. Rate Limit / Payload Size: reject before routing, validation or DB work
    4. Security headers, compression and CORS wrap the routed response

Request validation (validation.py) is not a Starlette middleware: it runs as
a FastAPI dependency so each route declares the schemas it needs.
"""
