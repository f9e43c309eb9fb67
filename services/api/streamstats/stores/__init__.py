"""Data stores for persistence and sessions.

Stores handle:
- PostgreSQL: DB sessions, read snapshots, ORM base
- Redis: user session payloads

No ranking/statistics logic in stores - that belongs in services.
"""
