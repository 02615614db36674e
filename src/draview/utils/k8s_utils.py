# src/draview/utils/k8s_utils.py
"""
Helpers for Kubernetes resource quantities.

Quantities are kept as exact ``Decimal`` values (never floats) so that
summing container requests and subtracting them from node allocatable
behaves like Kubernetes' own integer-mantissa arithmetic.
"""

import logging
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# Binary SI suffixes must be checked before the single-letter decimal ones.
_BINARY_SUFFIXES = {
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
    "Ei": 1024**6,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("0.000000001"),
    "u": Decimal("0.000001"),
    "m": Decimal("0.001"),
    "k": Decimal(1000),
    "M": Decimal(1000**2),
    "G": Decimal(1000**3),
    "T": Decimal(1000**4),
    "P": Decimal(1000**5),
    "E": Decimal(1000**6),
}

GIB = Decimal(1024**3)


def parse_quantity(quantity: Any) -> Decimal:
    """
    Parse a Kubernetes quantity ("500m", "14Gi", "1e3", 4) into a Decimal.

    None and unparseable values degrade to zero.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, Decimal):
        return quantity
    if isinstance(quantity, bool):
        return Decimal(0)
    if isinstance(quantity, int):
        return Decimal(quantity)
    if isinstance(quantity, float):
        return Decimal(str(quantity))

    text = str(quantity).strip()
    if not text:
        return Decimal(0)

    multiplier: Decimal = Decimal(1)
    number = text
    if text[-2:] in _BINARY_SUFFIXES:
        number = text[:-2]
        multiplier = Decimal(_BINARY_SUFFIXES[text[-2:]])
    elif text[-1] in _DECIMAL_SUFFIXES:
        number = text[:-1]
        multiplier = _DECIMAL_SUFFIXES[text[-1]]

    try:
        value = Decimal(number)
    except InvalidOperation:
        logger.debug("Could not parse quantity %r; treating it as zero.", quantity)
        return Decimal(0)

    if not value.is_finite():
        logger.debug("Non-finite quantity %r; treating it as zero.", quantity)
        return Decimal(0)

    return value * multiplier


def parse_resource_list(resources: Optional[Mapping[str, Any]]) -> Dict[str, Decimal]:
    """Parse every quantity of a resource mapping (e.g. node.status.capacity)."""
    if not resources:
        return {}
    return {str(name): parse_quantity(value) for name, value in resources.items()}


def _is_integral(value: Decimal) -> bool:
    return value == value.to_integral_value()


def format_quantity(value: Decimal, binary: bool = False) -> str:
    """
    Render a Decimal back into a canonical Kubernetes quantity string.

    With ``binary=True`` the largest exact binary suffix (Ki..Ei) is preferred,
    which is how memory and storage are usually declared. Otherwise decimal
    suffixes are used and fractional values fall back to milli/micro/nano units.
    """
    value = Decimal(value)
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_quantity(-value, binary=binary)

    if _is_integral(value):
        integral = int(value)
        if binary:
            for suffix, factor in reversed(list(_BINARY_SUFFIXES.items())):
                if integral >= factor and integral % factor == 0:
                    return f"{integral // factor}{suffix}"
        for suffix in ("E", "P", "T", "G", "M", "k"):
            factor = int(_DECIMAL_SUFFIXES[suffix])
            if integral >= factor and integral % factor == 0:
                return f"{integral // factor}{suffix}"
        return str(integral)

    for suffix in ("m", "u", "n"):
        scaled = value / _DECIMAL_SUFFIXES[suffix]
        if _is_integral(scaled):
            return f"{int(scaled)}{suffix}"

    # Below nano precision: round up to the next nano, like the API server does.
    nanos = (value / _DECIMAL_SUFFIXES["n"]).to_integral_value(rounding=ROUND_CEILING)
    return f"{int(nanos)}n"


def format_cpu(value: Decimal) -> str:
    """CPU cores as a quantity string ("2", "1500m")."""
    return format_quantity(value)


def format_bytes(value: Decimal) -> str:
    """Bytes as a binary-suffixed quantity string ("12Gi", "512Mi")."""
    return format_quantity(value, binary=True)


def format_gib(value: Decimal) -> str:
    """Bytes rendered as GiB with two decimals, e.g. "14.00Gi"."""
    return f"{Decimal(value) / GIB:.2f}Gi"
