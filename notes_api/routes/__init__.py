# Routes package init
"""
Notes API - API Routes Package
===============================

Route Inventory:
    - notes.py:   GET/POST/PUT   /api/{version}/note
                  GET/DELETE     /api/{version}/note/{id}
    - health.py:  GET            /health

Design Principle:
    Routes are THIN. They resolve the caller, build a request object, send it
    through the pipeline, and pick the status code. Business rules live in
    validators and services.
"""
