"""Database Infrastructure - declarative Base and async session factory (session.py).

Invariants:
    - All sessions are async (AsyncSession)
"""
