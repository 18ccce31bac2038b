from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, false, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Permission(Base):
    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    can_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=false()
    )
    can_create: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=false()
    )
    can_update: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=false()
    )
    can_delete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
