"""
admin_console.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the Account/Blog ORM models, engine/session setup, and repositories.
"""

# Package marker.
