"""Team and User models."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..storage.database import Base


class Team(Base):
    """A team owns its members; deleting the team removes them."""

    __tablename__ = "teams"

    team_name: Mapped[str] = mapped_column(String(100), primary_key=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    members: Mapped[list["User"]] = relationship(
        "User",
        back_populates="team",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="User.user_id",
    )

    def __repr__(self) -> str:
        return f"<Team(team_name='{self.team_name}')>"


class User(Base):
    """A team member; only active members are reviewer candidates."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_team_active", "team_name", "is_active"),
    )

    user_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    team_name: Mapped[str] = mapped_column(
        String(100), ForeignKey("teams.team_name", ondelete="CASCADE"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    team: Mapped["Team"] = relationship("Team", back_populates="members")

    def __repr__(self) -> str:
        return f"<User(user_id='{self.user_id}', team_name='{self.team_name}', is_active={self.is_active})>"
