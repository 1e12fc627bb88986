# Routes package init
"""
Catalog Backend - API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - services.py:          /api/services            (list, detail, CRUD)
    - versions.py:          /api/versions            (CRUD)
    - auth.py:              /api/auth/register, /api/auth/login
    - secure_resources.py:  /api/secure-resources    (token required)
    - health.py:            /health

Design Principle:
    Routes are THIN. They validate input, call a DAO or the auth service,
    and turn "not found" results into NotFoundError. Status codes for every
    other failure come from the exception handlers in main.py.
"""
