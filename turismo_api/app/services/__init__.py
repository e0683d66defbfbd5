"""
Service layer.

Services hold the record logic so API handlers stay thin and the
storage backend can change without touching them.
"""
