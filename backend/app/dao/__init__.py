# Data access package init
"""
Catalog Backend - Data Access Layer
====================================

What:  DAOs that issue queries and commands against the schema and return DTOs.
Why:   Routes stay free of SQL; DAOs stay free of HTTP.

DAO Inventory:
    - ServiceDao: listing with version counts, detail with versions, CRUD
    - VersionDao: CRUD, duplicate (name, service) detection
    - UserDao:    lookup by username, insert

Contract shared by every DAO:
    - Absence is returned as None (or False for delete), never raised
    - Unexpected SQLAlchemy failures are wrapped in DatabaseError
    - A recognised constraint violation is reported by constraint identity
      (see constraints.py), never by matching free-form error text in callers
"""
