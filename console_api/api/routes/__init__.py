"""Route Modules — plain FastAPI routes outside the /bin service tree.

Invariants:
    - Each module defines its own APIRouter with prefix and tags

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
"""
