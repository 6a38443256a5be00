# Middleware package init
"""
Notes API - Middleware Package
===============================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging captures final status and duration on the way back out
    3. CORS answers preflight requests before any route runs
"""
