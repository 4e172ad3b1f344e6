"""
Nigeria Tax Engine - Routers Package

FastAPI route handlers.

Routers:
- tax: PIT, CGT, CIT, WHT calculators and year comparison
- categories: Category taxonomy and keyword classification
- permissions: Settings and team permission lookups
"""

from taxengine.routers import tax, categories, permissions

__all__ = ["tax", "categories", "permissions"]
