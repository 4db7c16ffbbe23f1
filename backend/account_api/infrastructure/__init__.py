"""Infrastructure Layer — database, password hashing, and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage and driver exceptions are mapped to core/errors.py types here

Design Decisions:
    - Implementations of core/repository_protocols.py live here and are
      injected by api/dependencies.py
"""
