"""Services Layer — request pipeline and the public operation façade.

Invariants:
    - Every verb goes through RequestPipeline (no direct transport access)
    - Chained verbs stop at the first failure
"""
