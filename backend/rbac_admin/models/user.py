from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, SoftDeleteMixin

if TYPE_CHECKING:
    from .worker import Worker


class User(SoftDeleteMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            postgresql_where=text("delete_at IS NULL"),
            sqlite_where=text("delete_at IS NULL"),
        ),
        Index(
            "uq_users_worker_id_active",
            "worker_id",
            unique=True,
            postgresql_where=text("delete_at IS NULL"),
            sqlite_where=text("delete_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Stored as received; hashing happens before the value reaches this layer
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    worker_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("workers.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    worker: Mapped["Worker | None"] = relationship("Worker", back_populates="user")
