"""API Layer — service endpoint base, operation dispatch and error handlers.

Invariants:
    - Service endpoints registered explicitly in main.create_app (no auto-discovery)
    - Operations receive a ServiceRequest and write into a ServiceResponse

Design Decisions:
    - Thin endpoints delegate to operations (ADR: ExMA impureim sandwich)
"""
