"""
admin_console.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Apply principal sync, suspension checks, and moderation actions.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services take a request-scoped AsyncSession and raise `admin_console.errors` types.
