"""Core Layer - record lifecycle and collection algorithms, no concrete IO.

Invariants:
    - No module in core/ imports from services/, infrastructure/, db/ or models/
    - Storage and hooks reached only through the protocols in repository_protocols.py
"""
