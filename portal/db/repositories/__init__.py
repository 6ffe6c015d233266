"""
Per-domain repository modules for database access.

Each module is a set of functions taking an explicit SQLAlchemy Session.
Repositories raise `NotFoundError` / `ConflictError` for state-dependent
failures; shape validation happens in the API layer before they are called.
"""
