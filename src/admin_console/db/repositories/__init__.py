"""
admin_console.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for accounts and blogs.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories stay thin; access decisions and logging belong in services.
