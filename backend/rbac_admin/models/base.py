"""
SQLAlchemy declarative base and the soft-delete lifecycle shared by models.

Rows with a soft-delete concept move through two states:
ACTIVE (delete_at unset) -> SOFT_DELETED (delete_at set, still joinable).
Purging a row is a separate, irreversible store operation.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class LifecycleState(str, enum.Enum):
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"


class SoftDeleteMixin:
    delete_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    @property
    def lifecycle_state(self) -> LifecycleState:
        if self.delete_at is None:
            return LifecycleState.ACTIVE
        return LifecycleState.SOFT_DELETED

    def mark_deleted(self, when: datetime | None = None) -> None:
        if self.lifecycle_state is LifecycleState.SOFT_DELETED:
            raise ValueError("Row is already soft-deleted")
        self.delete_at = when or datetime.now(timezone.utc)


def supports_soft_delete(model: type) -> bool:
    return issubclass(model, SoftDeleteMixin)
