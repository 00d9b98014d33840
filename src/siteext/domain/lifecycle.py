"""Lifecycle stages of the host's boot/reload sequence and extension bindings.

One host cycle fires the stages in this relative order::

    MODEL_LOAD -> CLASS_UNLOAD -> ROUTE_LOAD -> PREPARE

``CLASS_UNLOAD`` only fires when the host reloads classes in-process
(development mode). ``PREPARE`` fires once per cycle, always last.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from siteext.errors import ConfigurationError


class LifecycleStage(StrEnum):
    """Named points in the host boot/reload sequence."""

    MODEL_LOAD = "model_load"
    CLASS_UNLOAD = "class_unload"
    ROUTE_LOAD = "route_load"
    PREPARE = "prepare"

    @property
    def order(self) -> int:
        """Position of this stage within one cycle."""
        return STAGE_ORDER.index(self)

    @property
    def hook_name(self) -> str:
        """Name of the lifecycle hook that announces this stage."""
        return f"on_{self.value}"


STAGE_ORDER: tuple[LifecycleStage, ...] = (
    LifecycleStage.MODEL_LOAD,
    LifecycleStage.CLASS_UNLOAD,
    LifecycleStage.ROUTE_LOAD,
    LifecycleStage.PREPARE,
)


def parse_stage(value: str | LifecycleStage) -> LifecycleStage:
    """Coerce *value* to a LifecycleStage.

    Raises:
        ConfigurationError: If *value* does not name a stage.
    """
    if isinstance(value, LifecycleStage):
        return value
    try:
        return LifecycleStage(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in STAGE_ORDER)
        msg = f"Unknown lifecycle stage {value!r} (expected one of: {choices})"
        raise ConfigurationError(msg) from None


# A capability is either a mixin class attached to a host class, or an
# action run in place when its stage fires (e.g. rebuilding navigation).
Capability = type | Callable[[], None]


@dataclass(frozen=True)
class ExtensionBinding:
    """One customization: attach *capability* to *target* at *stage*.

    Attributes:
        target: Dotted name of a host class (``"core.User"``), or a symbolic
            name for action capabilities (``"navigation.menu"``).
        capability: Mixin class or zero-argument action.
        stage: Lifecycle stage at which the binding is applied.
        name: Optional label for logs and listings.
    """

    target: str
    capability: Capability
    stage: LifecycleStage
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.target or not self.target.strip():
            msg = "Extension binding target must not be empty"
            raise ConfigurationError(msg)
        if not callable(self.capability):
            msg = f"Capability for {self.target!r} must be a class or a callable"
            raise ConfigurationError(msg)
        object.__setattr__(self, "stage", parse_stage(self.stage))

    @property
    def is_mixin(self) -> bool:
        """Whether the capability is a class attached to the target."""
        return isinstance(self.capability, type)

    @property
    def label(self) -> str:
        """Display name of the capability."""
        if self.name:
            return self.name
        return getattr(self.capability, "__name__", type(self.capability).__name__)

    def describe(self) -> dict[str, str]:
        """Plain-dict view used by listings and JSON output."""
        return {
            "stage": self.stage.value,
            "target": self.target,
            "capability": self.label,
            "kind": "mixin" if self.is_mixin else "action",
        }
