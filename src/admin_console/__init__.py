"""
admin_console

Top-level package for the admin console access-control and moderation service.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
