"""ORM Models — SQLAlchemy declarative models for groups and memberships.

Invariants:
    - All models inherit from Base (db/base.py)
    - Group is the aggregate root; memberships are scoped by group_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from iam.models.group import Group  # noqa: F401
from iam.models.group_member import GroupMember  # noqa: F401
