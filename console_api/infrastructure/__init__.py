"""Infrastructure Layer — logging setup and resolver implementations.

Invariants:
    - Infrastructure implements core Protocols, never the other way round

Design Decisions:
    - Resolver implementations replaceable without touching endpoints (ADR: ExMA single responsibility)
"""
