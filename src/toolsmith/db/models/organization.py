"""Organization (workspace) and SSO configuration tables."""

from sqlalchemy import JSON, Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from toolsmith.db.base import Base, TimestampMixin


class OrganizationRow(Base, TimestampMixin):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    enable_sign_up: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    auto_assign: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    sso_configs: Mapped[list["SSOConfigRow"]] = relationship(
        back_populates="organization", lazy="raise"
    )
    organization_users: Mapped[list["OrganizationUserRow"]] = relationship(  # noqa: F821
        back_populates="organization", lazy="raise"
    )


class SSOConfigRow(Base, TimestampMixin):
    __tablename__ = "sso_configs"
    __table_args__ = (UniqueConstraint("organization_id", "sso", name="uq_sso_configs_org_sso"),)

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    organization_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("organizations.id"), nullable=False, index=True
    )
    sso: Mapped[str] = mapped_column(String(32), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Provider settings, e.g. {client_id, client_secret, host_name}
    configs: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    organization: Mapped[OrganizationRow] = relationship(back_populates="sso_configs", lazy="raise")
