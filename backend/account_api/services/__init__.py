"""Services Layer — business rules between the API and the repository.

Invariants:
    - Services depend on core Protocols, never on FastAPI or SQLAlchemy types
    - Services raise typed errors from core/errors.py; they never build responses
"""
