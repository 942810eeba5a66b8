"""
Topology registry.

Board shapes are looked up by name so that a session or a config file can
pick one without importing its module. Only the diamond ships today.
"""

from typing import Dict, List, Optional, Type

from .base import Calculator


# name -> Calculator subclass, filled by @register_calculator at import time
_CALCULATORS: Dict[str, Type[Calculator]] = {}

DEFAULT_CALCULATOR = "diamond"


def register_calculator(cls: Type[Calculator]) -> Type[Calculator]:
    """
    Class decorator making a board shape available under cls.name.

    A later registration under the same name replaces the earlier one.
    """
    _CALCULATORS[cls.name] = cls
    return cls


def create_calculator(name: Optional[str] = None) -> Calculator:
    """
    Build the neighbour tables for a board shape.

    Args:
        name: Registered shape name; None picks the default shape

    Returns:
        A fresh Calculator for that shape

    Raises:
        ValueError: If no shape is registered under name
    """
    if name is None:
        name = get_default_calculator_name()
    try:
        cls = _CALCULATORS[name]
    except KeyError:
        known = ", ".join(_CALCULATORS) or "none"
        raise ValueError(f"No board shape named {name!r} (registered: {known})") from None
    return cls()


def get_calculator_names() -> List[str]:
    """Registered shape names, in registration order."""
    return list(_CALCULATORS)


def get_default_calculator_name() -> str:
    # Fall back to whatever was registered first if the diamond is missing
    if DEFAULT_CALCULATOR in _CALCULATORS or not _CALCULATORS:
        return DEFAULT_CALCULATOR
    return next(iter(_CALCULATORS))
