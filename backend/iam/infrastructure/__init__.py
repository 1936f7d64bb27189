"""Infrastructure Layer — database sessions and logging.

Invariants:
    - Infrastructure never imports from api/ or services/
    - SQLAlchemy failures surface as DatabaseError (core/errors.py)
"""
