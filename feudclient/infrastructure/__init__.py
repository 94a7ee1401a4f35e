"""Infrastructure Layer — wire transport, shared caches, and cross-cutting concerns.

Invariants:
    - Infrastructure never interprets envelopes (core/envelope.py does)
    - All httpx failures mapped to TransportFailure before leaving this layer
"""
