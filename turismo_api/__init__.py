"""
Top-level package for the Tourism Flow Records API.

All functionality lives in submodules under ``app``; bundled sample
data files live under ``data``.
"""

__all__ = []
