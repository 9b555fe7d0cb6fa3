"""PullRequest model."""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..storage.database import Base


class PullRequestStatus(str, Enum):
    """Status of a pull request. OPEN -> MERGED is the only transition."""
    OPEN = "OPEN"
    MERGED = "MERGED"


class PullRequest(Base):
    """A pull request awaiting review."""

    __tablename__ = "pull_requests"
    __table_args__ = (
        CheckConstraint("status IN ('OPEN', 'MERGED')", name="ck_pull_requests_status"),
    )

    pull_request_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    pull_request_name: Mapped[str] = mapped_column(String(200), nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("users.user_id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PullRequestStatus.OPEN.value, index=True
    )

    # Bumped on every write to the PR or its reviewer set
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    merged_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_merged(self) -> bool:
        return self.status == PullRequestStatus.MERGED.value

    def __repr__(self) -> str:
        return f"<PullRequest(pull_request_id='{self.pull_request_id}', status='{self.status}')>"
