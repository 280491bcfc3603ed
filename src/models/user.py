"""User model for GitHub-authenticated users."""
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.enums import UserRole

if TYPE_CHECKING:
    from models.api_token import ApiToken
    from models.collection import Collection


class User(Base, UUIDv7Mixin, TimestampMixin):
    """User model - stores the GitHub profile used for authorship and ownership."""

    __tablename__ = "users"

    # id provided by UUIDv7Mixin
    github_id: Mapped[int] = mapped_column(
        BigInteger,
        unique=True,
        index=True,
        comment="GitHub numeric user id - stable across login renames",
    )
    login: Mapped[str] = mapped_column(String(100))
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, length=20),
        default=UserRole.USER,
        nullable=False,
    )

    api_tokens: Mapped[list["ApiToken"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
    collections: Mapped[list["Collection"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        """Whether the user may moderate and edit any content."""
        return self.role == UserRole.ADMIN
