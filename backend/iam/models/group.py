"""Group ORM — persists named collections of users.

Invariants:
    - id is a string UUID primary key (client-side default)
    - name is non-nullable
    - deleting a group deletes its memberships

Design Decisions:
    - String ids over native UUID: identifiers stay opaque and portable across
      PostgreSQL and SQLite
    - members relationship loaded with selectin: avoids lazy IO in async context
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.db.base import Base


class Group(Base):
    """Group aggregate root — owns its memberships."""
    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    members: Mapped[list["GroupMember"]] = relationship(
        "GroupMember", back_populates="group",
        cascade="all, delete-orphan", lazy="selectin",
    )
