"""ORM Models - SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata knows every table before create_all
"""

from recordkit.models.stored_record import StoredRecord  # noqa: F401
