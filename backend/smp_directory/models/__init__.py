"""ORM Models — SQLAlchemy declarative models for users, service groups and business cards.

Invariants:
    - All models inherit from Base (db/base.py)
    - ServiceGroup is the aggregate root of its BusinessCard and entities

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from smp_directory.models.user import User  # noqa: F401
from smp_directory.models.service_group import ServiceGroup  # noqa: F401
from smp_directory.models.business_card import BusinessCard  # noqa: F401
from smp_directory.models.business_card_entity import BusinessCardEntity  # noqa: F401
