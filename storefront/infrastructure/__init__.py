"""Infrastructure Layer: database session management and logging setup.

Invariants:
    - Infrastructure never imports from services or api
    - Driver errors mapped to StorageFaultError before they leave this layer
"""
