# Middleware package init
"""
EasyBuild Content API - Middleware Package
============================================

Middleware Chain:
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit: rejects excess writes before any database work
    2. Request ID: sets the correlation ID used by every log line
    3. Logging:    logs the response status and duration with that ID
    4. GZip/CORS:  FastAPI/Starlette built-ins

Responses travel back through the same chain in reverse.
"""
