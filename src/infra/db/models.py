from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import DateTime, Enum, Integer, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, MappedAsDataclass, mapped_column

from core.domain.check_status import CheckStatus


class Base(MappedAsDataclass, DeclarativeBase):
    pass


class UptimeCheckModel(Base):
    __tablename__ = "uptime_checks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)
    website_id: Mapped[UUID] = mapped_column(Uuid, index=True)

    status: Mapped[CheckStatus] = mapped_column(
        Enum(
            CheckStatus,
            native_enum=False,
            name="check_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
    )
    response_time: Mapped[int] = mapped_column(Integer)
    status_code: Mapped[int] = mapped_column(Integer)

    checked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )
