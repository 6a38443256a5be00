# Services package init
"""
Notes API - Services Layer
===========================

What:  Everything between the routes (HTTP) and the database.

Service Inventory:
    - validators.py:    field rules per request type
    - note_service.py:  one handler per note operation
    - pipeline.py:      validates a request, then dispatches it to its handler

Routes only ever call `pipeline.send(db, request)`.
"""
