"""
Endpoint subpackage.

Each module defines an APIRouter for one domain; they are aggregated
in ``router.py`` one level up.
"""
