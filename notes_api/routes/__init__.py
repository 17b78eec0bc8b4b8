# Routes package init
"""
Notes API — API Routes Package
==============================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles a specific resource.

Route Inventory:
    - health.py:  GET /health, GET /ping, GET /api/v1 (API info)
    - users.py:   /api/v1/users, /api/v1/users/{user_id}/notes
    - notes.py:   /api/v1/notes, /api/v1/notes/users/{user_id}/notes

Design Principle:
    Routes are THIN. They declare which request segments to validate,
    resolve a controller and return its response. Business rules live in
    the controllers; persistence lives in the repositories.
"""
