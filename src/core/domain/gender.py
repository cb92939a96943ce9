"""Sex options accepted by the PPS wizard.

The wizard's personal-information step posts the raw value of this enum
as ``course[gender]``; the two values are the only ones its form offers.
"""

from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    """Sex/gender code sent to the wizard."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def default(cls) -> "Gender":
        """Return the value preselected by the wizard's form."""

        return cls.MALE

    @classmethod
    def parse(cls, value: "str | Gender") -> "Gender":
        """Accept enum members or case-insensitive strings (``"Male"``, ``" female "``)."""

        if isinstance(value, Gender):
            return value
        return cls(str(value).strip().lower())
