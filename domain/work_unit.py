"""Remediation cost values: a decimal amount of work in days, hours or minutes."""

import re
from decimal import Decimal
from enum import Enum
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field

from domain.errors import InvalidNumericValueError, InvalidUnitError

HOURS_IN_DAY = 8
MINUTES_IN_HOUR = 60

# Plain ASCII decimal or scientific notation only
_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class TimeUnit(str, Enum):
    """Unit of a WorkUnit, using the tokens found in model documents."""

    DAYS = "d"
    HOURS = "h"
    MINUTES = "mn"

    @classmethod
    def parse(cls, token: str) -> "TimeUnit":
        """
        Parse a unit token.

        Examples:
            >>> TimeUnit.parse(" H ")
            <TimeUnit.HOURS: 'h'>
            >>> TimeUnit.parse("minutes")
            <TimeUnit.MINUTES: 'mn'>

        Raises:
            ValueError: If the token is not a known unit or alias
        """
        key = str(token).strip().lower()
        if key in _UNIT_ALIASES:
            return _UNIT_ALIASES[key]
        raise ValueError(f"Unknown time unit: {token!r}")

    def minutes(self, hours_in_day: int = HOURS_IN_DAY) -> int:
        """Number of minutes in one of this unit."""
        if self is TimeUnit.DAYS:
            return hours_in_day * MINUTES_IN_HOUR
        if self is TimeUnit.HOURS:
            return MINUTES_IN_HOUR
        return 1


_UNIT_ALIASES: dict[str, TimeUnit] = {
    "d": TimeUnit.DAYS,
    "day": TimeUnit.DAYS,
    "days": TimeUnit.DAYS,
    "h": TimeUnit.HOURS,
    "hour": TimeUnit.HOURS,
    "hours": TimeUnit.HOURS,
    "mn": TimeUnit.MINUTES,
    "min": TimeUnit.MINUTES,
    "minute": TimeUnit.MINUTES,
    "minutes": TimeUnit.MINUTES,
}

DEFAULT_UNIT = TimeUnit.HOURS
ALLOWED_UNITS = ", ".join(unit.value for unit in TimeUnit)


@total_ordering
class WorkUnit(BaseModel):
    """
    Immutable remediation cost.

    Two work units are equal when they amount to the same number of minutes,
    so WorkUnit(1, TimeUnit.DAYS) == WorkUnit(8, TimeUnit.HOURS) with the
    default 8-hour day, and a zero value is equal to zero in any unit.
    """

    model_config = ConfigDict(frozen=True)

    value: Decimal = Field(default=Decimal(0), ge=0)
    unit: TimeUnit = DEFAULT_UNIT
    hours_in_day: int = Field(default=HOURS_IN_DAY, gt=0)

    def __init__(self, value: Decimal | int | str = Decimal(0), unit: TimeUnit = DEFAULT_UNIT, **data) -> None:
        super().__init__(value=value, unit=unit, **data)

    @classmethod
    def create(cls, value: Decimal | int | str = 0, unit: TimeUnit = DEFAULT_UNIT) -> "WorkUnit":
        return cls(value, unit)

    @classmethod
    def zero(cls, *, hours_in_day: int = HOURS_IN_DAY) -> "WorkUnit":
        """The canonical zero offset."""
        return cls(Decimal(0), DEFAULT_UNIT, hours_in_day=hours_in_day)

    @classmethod
    def parse(
        cls,
        raw_value: str,
        raw_unit: str | None = None,
        *,
        field: str = "value",
        hours_in_day: int = HOURS_IN_DAY,
    ) -> "WorkUnit":
        """
        Build a WorkUnit from document text.

        Args:
            raw_value: Numeric text, e.g. "3.2"
            raw_unit: Unit token, e.g. "h"; DEFAULT_UNIT when missing
            field: Field name used in error messages (e.g. "factor")
            hours_in_day: Day length used for conversions

        Raises:
            InvalidNumericValueError: If the value is not a finite, non-negative number
            InvalidUnitError: If the unit token is unknown
        """
        text = str(raw_value).strip()
        if not _NUMBER.fullmatch(text):
            raise InvalidNumericValueError(text, field)
        value = Decimal(text)
        if value < 0:
            raise InvalidNumericValueError(text, field, expected="a non-negative numeric value")

        unit = DEFAULT_UNIT
        if raw_unit is not None and str(raw_unit).strip():
            try:
                unit = TimeUnit.parse(raw_unit)
            except ValueError as err:
                raise InvalidUnitError(str(raw_unit).strip(), f"{field}-unit", ALLOWED_UNITS) from err

        return cls(value, unit, hours_in_day=hours_in_day)

    def to_minutes(self) -> Decimal:
        return self.value * self.unit.minutes(self.hours_in_day)

    def is_zero(self) -> bool:
        return self.value == 0

    def convert_to(self, unit: TimeUnit) -> "WorkUnit":
        """
        Express this amount in another unit.

        Exact when converting to a finer unit. Converting to a coarser unit
        divides, which is exact only when the amount is a whole multiple.
        """
        if unit is self.unit:
            return self
        value = self.to_minutes() / unit.minutes(self.hours_in_day)
        return WorkUnit(value, unit, hours_in_day=self.hours_in_day)

    def _finer_unit(self, other: "WorkUnit") -> TimeUnit:
        if self.hours_in_day != other.hours_in_day:
            raise ValueError(
                f"Cannot combine work units with different day lengths ({self.hours_in_day}h vs {other.hours_in_day}h)"
            )
        if self.unit.minutes(self.hours_in_day) <= other.unit.minutes(other.hours_in_day):
            return self.unit
        return other.unit

    def __add__(self, other: object) -> "WorkUnit":
        if not isinstance(other, WorkUnit):
            return NotImplemented
        unit = self._finer_unit(other)
        total = self.to_minutes() + other.to_minutes()
        return WorkUnit(total / unit.minutes(self.hours_in_day), unit, hours_in_day=self.hours_in_day)

    def __sub__(self, other: object) -> "WorkUnit":
        if not isinstance(other, WorkUnit):
            return NotImplemented
        unit = self._finer_unit(other)
        total = self.to_minutes() - other.to_minutes()
        if total < 0:
            raise ValueError(f"Work unit cannot be negative: {self} - {other}")
        return WorkUnit(total / unit.minutes(self.hours_in_day), unit, hours_in_day=self.hours_in_day)

    def __mul__(self, factor: object) -> "WorkUnit":
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            return NotImplemented
        if factor < 0:
            raise ValueError(f"Cannot multiply a work unit by a negative factor: {factor}")
        return WorkUnit(self.value * factor, self.unit, hours_in_day=self.hours_in_day)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkUnit):
            return NotImplemented
        return self.to_minutes() == other.to_minutes()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, WorkUnit):
            return NotImplemented
        return self.to_minutes() < other.to_minutes()

    def __hash__(self) -> int:
        return hash(self.to_minutes())

    def __str__(self) -> str:
        return f"{self.value}{self.unit.value}"
