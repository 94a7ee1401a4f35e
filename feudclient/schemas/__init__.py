"""Pydantic Schemas — typed shapes for façade results.

Invariants:
    - Schemas validate at the system boundary (server content → caller)

Design Decisions:
    - Separate from core/domain_types: schemas are caller contracts, domain types are wire records
"""
