"""
Database Module

Database connectivity and session management for ChannelHub.

    FastAPI Route
        │  Dependency Injection: get_db()  (reads app.state.database)
        ▼
    AsyncSession  ──►  Repositories  ──►  PostgreSQL

Components:
===========
- session.py: the Database handle (engine, session factory, lifecycle)

Usage:
======
    from channelhub.shared.db import Database

    database = Database.from_settings(settings)
    await database.connect()
"""

from channelhub.shared.db.session import Database

__all__ = [
    "Database",
]
