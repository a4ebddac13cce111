"""
admin_console.api.routers

HTTP routers: health, dev token mint, session, users, blogs.
"""
