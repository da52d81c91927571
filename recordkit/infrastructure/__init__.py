"""Infrastructure - concrete collaborators: storages, database, logging, audit hooks.

Invariants:
    - Implements the protocols declared in core/repository_protocols.py
"""
