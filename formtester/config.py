"""Configuration for the form tester."""

from dataclasses import dataclass
from typing import Any, Dict

from formtester.types import ContextKind


@dataclass(frozen=True)
class TesterConfig:
    """Settings for a FormTester instance.

    Attributes:
        action_context_kind: Rendering context whose template parameters are
            harvested for forms; other contexts are passed through untouched
        debug_exit_status: Process exit status used by `FormTester.debug()`
        include_schema_in_messages: Whether `has_errors` messages carry the
            formatted error schema

    Examples:
        >>> config = TesterConfig.from_dict({"debugExitStatus": 2})
        >>> config.debug_exit_status
        2
        >>> config.action_context_kind
        'action'
    """
    action_context_kind: str = ContextKind.ACTION.value
    debug_exit_status: int = 1
    include_schema_in_messages: bool = True

    def __post_init__(self):
        """Normalize enum values to strings."""
        if isinstance(self.action_context_kind, ContextKind):
            object.__setattr__(self, "action_context_kind", self.action_context_kind.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "actionContextKind": self.action_context_kind,
            "debugExitStatus": self.debug_exit_status,
            "includeSchemaInMessages": self.include_schema_in_messages,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TesterConfig":
        """Create TesterConfig from dict, using defaults for missing keys."""
        defaults = cls()
        return cls(
            action_context_kind=data.get("actionContextKind", defaults.action_context_kind),
            debug_exit_status=data.get("debugExitStatus", defaults.debug_exit_status),
            include_schema_in_messages=data.get(
                "includeSchemaInMessages", defaults.include_schema_in_messages
            ),
        )


__all__ = [
    "TesterConfig",
]
