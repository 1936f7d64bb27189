"""GroupMember ORM — the relation between a user and a group.

Invariants:
    - (group_id, user_id) is the primary key — a user joins a group at most once
    - user_id is an opaque identifier; no users table is owned here
    - group_id cascades on delete at the database level
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.db.base import Base


class GroupMember(Base):
    """Membership of one user in one group."""
    __tablename__ = "group_members"

    group_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    group: Mapped["Group"] = relationship("Group", back_populates="members")
