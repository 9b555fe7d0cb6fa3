"""ReviewerAssignment model."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..storage.database import Base


class ReviewerAssignment(Base):
    """Links one reviewer to one pull request.

    ``position`` is the reviewer's slot in the PR's ordered reviewer list.
    A replacement reviewer inherits the slot of the reviewer it replaces.
    """

    __tablename__ = "pr_reviewers"

    pull_request_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        primary_key=True,
    )
    reviewer_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<ReviewerAssignment(pull_request_id='{self.pull_request_id}', "
            f"reviewer_id='{self.reviewer_id}', position={self.position})>"
        )
