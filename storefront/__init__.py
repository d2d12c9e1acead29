"""Storefront API: users and products resource stores behind a FastAPI surface.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
