"""
Values -- Decimal amount coercion and boundary rounding.

Responsibility:
    Provides the primitive value helpers every settlement computation uses:
    participant identifiers, float-safe Decimal coercion, and the single
    rounding function applied at output boundaries (transfer amounts and
    the per-head share).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by the ledger aggregate, the policy, and every engine.

Invariants enforced:
    - Amounts are always Decimal (never float). Floats are converted through
      their shortest ``repr`` so ``0.1`` becomes ``Decimal("0.1")``, not its
      binary expansion.
    - Rounding happens only where callers ask for it; nothing here rounds
      implicitly.

Failure modes:
    - ValueError on booleans, non-numeric strings, NaN or infinity.
    - TypeError on unsupported types.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ParticipantId = str

ZERO = Decimal("0")


def to_amount(value: Decimal | int | str | float) -> Decimal:
    """
    Coerce a numeric value into a finite Decimal.

    Preconditions:
        - value is a Decimal, int, float, or numeric string.

    Postconditions:
        - Returns a finite Decimal equal to the decimal value the caller wrote.

    Raises:
        ValueError: If value is a bool, non-numeric, NaN, or infinite.
        TypeError: If value has an unsupported type.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    else:
        raise TypeError(f"amount must be Decimal, int, float or str, got {type(value)}")

    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def quantum(decimal_places: int) -> Decimal:
    """Smallest representable unit for the given decimal places (0.01 for 2)."""
    return Decimal(1).scaleb(-decimal_places)


def round_amount(
    value: Decimal,
    decimal_places: int = 2,
    rounding: str = ROUND_HALF_UP,
) -> Decimal:
    """
    Round to a fixed number of decimal places.

    Postconditions:
        - Returns a new Decimal with exactly ``decimal_places`` digits after
          the point (e.g. ``Decimal("2500")`` -> ``Decimal("2500.00")``).
    """
    return value.quantize(quantum(decimal_places), rounding=rounding)
