"""
admin_console.api

API package for the admin console service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error rendering, and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + access gate + delegation to services.
