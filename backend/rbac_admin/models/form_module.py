from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, func, text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, SoftDeleteMixin


class FormModule(SoftDeleteMixin, Base):
    __tablename__ = "form_modules"
    __table_args__ = (
        Index(
            "uq_form_modules_module_id_form_id_active",
            "module_id",
            "form_id",
            unique=True,
            postgresql_where=text("delete_at IS NULL"),
            sqlite_where=text("delete_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    module_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
