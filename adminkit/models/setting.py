"""Setting model for per-target key-value storage."""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from adminkit.exceptions import ValidationException
from adminkit.extensions import db

VAR_MAX_LENGTH = 255


class Setting(db.Model):  # type: ignore[name-defined]
    """Key-value setting record scoped to an optional target.

    A target is identified by a (target_type, target_id) pair, e.g.
    ("User", 42). Global settings leave both columns NULL. Values are stored
    as JSON so scalars, strings, lists and mappings round-trip unchanged.
    """

    __tablename__ = "settings"
    __table_args__ = (
        UniqueConstraint("target_type", "target_id", "var", name="uq_settings_target_var"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    target_type: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    target_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    var: Mapped[str] = mapped_column(String(VAR_MAX_LENGTH), nullable=False, index=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @validates("var")
    def validate_var(self, key: str, var: str) -> str:
        if not isinstance(var, str) or not var:
            raise ValidationException("Setting name must be a non-empty string")
        if len(var) > VAR_MAX_LENGTH:
            raise ValidationException(
                f"Setting name must be at most {VAR_MAX_LENGTH} characters"
            )
        return var

    @validates("value")
    def validate_value(self, key: str, value: Any) -> Any:
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ValidationException(
                f"Value for setting {self.var} is not JSON serializable: {e}"
            ) from e
        return value

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<Setting var={self.var} target_type={self.target_type} "
            f"target_id={self.target_id}>"
        )
