"""
API package.

``router.py`` exposes a top-level ``router`` which includes every
domain router from ``endpoints``.
"""
