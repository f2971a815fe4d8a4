"""Database package — SQLAlchemy declarative Base shared by models and migrations.

Design Decisions:
    - Engine and sessions live in infrastructure/database.py; this package only holds metadata
"""
