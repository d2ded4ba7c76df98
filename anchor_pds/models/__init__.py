"""ORM Models - SQLAlchemy declarative models for persisted state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Check-ins are keyed by record key; settings are keyed by DID

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from anchor_pds.models.checkin import Checkin  # noqa: F401
from anchor_pds.models.user_settings import UserSettingsRow  # noqa: F401
