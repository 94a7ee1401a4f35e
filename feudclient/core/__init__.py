"""Core Layer — pure request/response logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or config
    - All functions are pure and deterministic
"""
