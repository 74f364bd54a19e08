"""Database Package — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engine and sessions are owned by infrastructure/database.py, not this package
"""
