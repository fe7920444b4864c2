"""
Top-level package for the Food Storage API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``food_api.app.main:app``.
"""

__all__ = []
