"""Infrastructure layer — SQLite storage, seed files, photos, workspace.

This layer depends on stdlib, third-party libs (SQLAlchemy, pluggy) and
the domain models it persists. It must never import from services,
commands, or output.
"""
