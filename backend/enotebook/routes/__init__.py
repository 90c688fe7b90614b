# Routes package init
"""
ENotebook Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:    /api/auth/*   (register, login, current user, user admin)
    - notes.py:   /api/notes/*  (ownership-checked note CRUD)
    - health.py:  GET /health   (service health check)

Routes are thin: they declare the contract (body schema, status code, auth
dependency) and delegate to a service. Business rules live in services.
"""
