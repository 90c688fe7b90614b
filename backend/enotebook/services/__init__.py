# Services package init
"""
ENotebook Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services accept validated schemas plus a session, apply business rules,
       and return response schemas or raise application exceptions.

Service Inventory:
    - TokenService:   Signs and verifies identity tokens (PyJWT)
    - AccountService: Registration, login, current user, user administration
    - NoteService:    Ownership-checked CRUD over notes
"""
