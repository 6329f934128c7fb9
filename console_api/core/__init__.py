"""Core Layer — encoding, validation, resource location; no Starlette, no IO.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Request, response and resolver reach core through Protocols

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
