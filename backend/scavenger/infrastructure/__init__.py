"""Infrastructure Layer: storage, host capabilities, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports services/ or api/
    - Implements the Protocols declared in core/repository_protocols.py
"""
