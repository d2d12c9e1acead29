"""Core: pure logic and contracts shared by the stores and the HTTP shell.

Invariants:
    - Core never imports from infrastructure, services or api
"""
