"""Configuration of the left finite difference operators with parsing from TOML.

Example for TOML section:
    [diffl]
    edge = "circ"
    add = false

"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

import numpy as np

__all__ = ["EdgeMode", "DifferenceOptions"]

logger = logging.getLogger(__name__)


# Utility functions for TOML parsing
def _get_section(data: dict, section: str) -> dict:
    """Utility to get a section from a toml-loaded dictionary."""
    try:
        return data[section]
    except KeyError:
        raise KeyError(f"Section {section} not found.")


def _get_section_from_toml(path: Path | list[Path], section: str) -> dict:
    if isinstance(path, (str, Path)):
        data = tomllib.loads(Path(path).read_text())
    elif isinstance(path, list):
        data = {}
        for p in path:
            part = tomllib.loads(Path(p).read_text())
            data.update(part)
    else:
        raise TypeError(f"Path of type {type(path)} not supported.")
    sec = _get_section(data, section)
    return sec


def _get_key(section: dict, key: str, default=None, required=True, type_=None) -> Any:
    """Utility to get a key from a section with type conversion and default value."""
    if required and key not in section:
        raise KeyError(f"Missing key '{key}' in section {section}.")

    if key in section:
        value = section[key]
        return type_(value) if type_ else value
    else:
        return default


class EdgeMode(StrEnum):
    """Treatment of the first entries along the differentiated axis."""

    ZERO = "zero"
    """Set the first entries to zero."""
    CIRC = "circ"
    """Circulant (periodic) boundary conditions, wrapping to the last entries."""
    NONE = "none"
    """Leave the first entries untouched."""

    @classmethod
    def parse(cls, edge: EdgeMode | str) -> EdgeMode:
        """Convert a string to an edge mode.

        Args:
            edge (EdgeMode or str): edge mode or its name

        Returns:
            EdgeMode: edge mode

        Raises:
            ValueError: if the edge mode is unknown

        """
        try:
            return cls(edge)
        except ValueError:
            raise ValueError(
                f"edge {edge!r} not supported, choose from {[e.value for e in cls]}."
            ) from None


@dataclass(frozen=True)
class DifferenceOptions:
    """Options shared by the forward and adjoint left finite difference.

    Strings are accepted for the edge mode and converted on construction, such that
    an instance always carries a valid configuration.

    """

    edge: EdgeMode = EdgeMode.ZERO
    """Boundary treatment of the first entries along the differentiated axis."""
    add: bool = False
    """Use x[i] + x[i-1] instead of x[i] - x[i-1]."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "edge", EdgeMode.parse(self.edge))
        if not isinstance(self.add, (bool, np.bool_)):
            raise TypeError(f"add must be a bool, not {type(self.add).__name__}.")
        object.__setattr__(self, "add", bool(self.add))

    def kwargs(self) -> dict:
        """Keyword arguments for the functional interface, e.g., diffl(x, **kwargs)."""
        return {"edge": self.edge, "add": self.add}

    @classmethod
    def load(
        cls, path: Path | list[Path], section: str = "diffl"
    ) -> "DifferenceOptions":
        """Read options from a TOML file.

        Args:
            path (Path or list of Path): TOML file(s); later files overwrite earlier
                sections of the same name
            section (str): name of the section holding the options

        Returns:
            DifferenceOptions: options

        """
        sec = _get_section_from_toml(path, section)
        options = cls(
            edge=_get_key(sec, "edge", default=EdgeMode.ZERO, required=False, type_=str),
            add=_get_key(sec, "add", default=False, required=False),
        )
        logger.debug(f"Loaded {options} from section [{section}] of {path}.")
        return options
