"""Configuration for area validation."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .core.errors import ConfigurationError


@dataclass
class ValidityConfig:
    """Switches for the optional steps of :func:`polyvalid.validate_area`.

    The node consistency check always runs; it is the one every other step
    depends on.

    Attributes:
        check_duplicate_rings: Reject areas with two identical rings
        check_ring_self_intersection: Reject rings passing twice through a
            point. Disable to accept self-touching rings that form holes.
        check_holes_in_shell: Reject holes lying outside their shell
        stop_at_first_proper: Stop self-noding at the first proper intersection

    Examples:
        >>> config = ValidityConfig(check_ring_self_intersection=False)
        >>> config = ValidityConfig.from_mapping({'check_holes_in_shell': False})
    """

    check_duplicate_rings: bool = True
    check_ring_self_intersection: bool = True
    check_holes_in_shell: bool = True
    stop_at_first_proper: bool = True

    def validate(self) -> None:
        """Raise ConfigurationError if any setting has the wrong type."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"{f.name} must be a bool, got {type(value).__name__}"
                )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ValidityConfig:
        """Build a config from a mapping such as a parsed settings file.

        Raises:
            ConfigurationError: On unknown keys or non-boolean values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown validity settings: {', '.join(unknown)}")

        config = cls(**dict(values))
        config.validate()
        return config


__all__ = ['ValidityConfig']
