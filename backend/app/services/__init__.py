# Services package init
"""
Catalog Backend - Services Layer
=================================

What:  Logic that is more than a single DAO call.
Why:   Routes handle HTTP, DAOs handle SQL; authentication needs both plus
       hashing and token signing, so it gets its own layer.

Service Inventory:
    - AuthService: register, login, access token issue/verify

Service and version CRUD has no business rules beyond validation, so those
routes call their DAOs directly.
"""
