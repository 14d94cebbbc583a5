"""User and organization membership tables."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from toolsmith.db.base import Base, TimestampMixin
from toolsmith.db.models.organization import OrganizationRow


class UserRow(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_digest: Mapped[str | None] = mapped_column(Text, nullable=True)
    forgot_password_token: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    default_organization_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("organizations.id"), nullable=True
    )


class OrganizationUserRow(Base, TimestampMixin):
    __tablename__ = "organization_users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("organizations.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.id"), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(64), nullable=False, default="all_users")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="invited")
    invitation_token: Mapped[str | None] = mapped_column(String(128), nullable=True)

    user: Mapped[UserRow] = relationship(lazy="raise")
    organization: Mapped[OrganizationRow] = relationship(back_populates="organization_users", lazy="raise")
