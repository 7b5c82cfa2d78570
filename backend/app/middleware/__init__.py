# Middleware package init
"""
Timeledger Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit first: reject abusive clients before any work
    2. Request ID: correlation ID for every later log line
    3. Logging: sees the final status and the full duration

    Responses travel back through the same chain in reverse, which is how
    the X-Request-ID header ends up on every response.
"""
