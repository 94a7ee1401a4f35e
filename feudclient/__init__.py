"""feudclient — asyncio client for the word-game HTTP/JSON service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, e.g.
      `from feudclient.services.feud_client import FeudClient`
"""
