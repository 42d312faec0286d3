"""Pydantic model for the options accepted by :func:`opengraph.parse`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, field_validator

from opengraph.settings import DATE_OBJECT_MODES, ISO8601


class ParseOptions(BaseModel):
    """Recognised parse options.

    Attributes:
        date:     ``strftime`` format for coerced dates, or ``"object"`` /
                  ``"datetime"`` to keep :class:`~datetime.datetime` values.
        timezone: IANA zone name dates are converted into.  ``None`` keeps
                  whatever zone the parsed value implies.
        cast:     Turn off to store every ``content`` attribute verbatim.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    date: str = ISO8601
    timezone: str | None = None
    cast: bool = True

    @field_validator("date")
    @classmethod
    def _date_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("date format must not be empty")
        return v

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {v!r}") from exc
        return v

    @property
    def wants_object(self) -> bool:
        return self.date in DATE_OBJECT_MODES

    @property
    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None

    @classmethod
    def coerce(cls, options: ParseOptions | Mapping[str, Any] | None) -> ParseOptions:
        """Return *options* as a :class:`ParseOptions`, applying defaults."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))
