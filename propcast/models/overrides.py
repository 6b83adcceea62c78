"""Auto-or-manual values.

A figure the system estimates ("auto") may be replaced by one the user typed
in ("manual"). The wire form is a {mode, auto, manual} triplet; internally the
value is one of two tagged variants.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Auto:
    value: Decimal | None = None


@dataclass(frozen=True)
class Manual:
    value: Decimal


Override = Auto | Manual


def from_triplet(
    mode: str,
    auto: Decimal | None = None,
    manual: Decimal | None = None,
) -> Override:
    """Build an override from its {mode, auto, manual} wire shape.

    Manual wins only when mode is "manual" and a manual value was supplied.
    """
    if mode not in ("auto", "manual"):
        raise ValueError(f"Unknown override mode: {mode}")
    if mode == "manual" and manual is not None:
        return Manual(manual)
    return Auto(auto)


def resolve(value: Override | None, default: Decimal = Decimal("0")) -> Decimal:
    if value is None or value.value is None:
        return default
    return value.value
