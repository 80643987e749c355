"""
Top-level package for the Clinic API.

All functionality lives in submodules under ``app``; the application
object can be imported as ``clinic_api.app.main:app``.
"""

__all__ = []
