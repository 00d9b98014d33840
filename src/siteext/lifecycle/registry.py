"""Process-wide table of extension bindings, applied per lifecycle stage.

The registry is filled once during bootstrap, sealed, and then re-applied
every time a stage fires. Re-application is what keeps a customization
alive across a host class reload; the host's ``attach`` primitive is
idempotent, so applying a binding again never duplicates behavior.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

from siteext.domain.lifecycle import STAGE_ORDER, ExtensionBinding, LifecycleStage, parse_stage
from siteext.errors import AttachmentError, ConfigurationError

if TYPE_CHECKING:
    from siteext.host.protocols import ClassAttacher, LifecycleSubscriber

logger = logging.getLogger(__name__)


class ExtensionRegistry:
    """Stores bindings keyed by stage and applies them in registration order.

    Parameters:
        attacher: Host primitive used to attach mixin capabilities.
    """

    def __init__(self, attacher: ClassAttacher) -> None:
        self._attacher = attacher
        self._bindings: dict[LifecycleStage, list[ExtensionBinding]] = {
            stage: [] for stage in STAGE_ORDER
        }
        self._sealed = False
        self._subscriptions: list[object] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, binding: ExtensionBinding) -> None:
        """Append *binding* to its stage.

        Duplicates are allowed and applied twice.

        Raises:
            ConfigurationError: If the registry has been sealed.
        """
        if self._sealed:
            msg = f"Cannot register {binding.label} for {binding.target}: registry is sealed"
            raise ConfigurationError(msg)
        self._bindings[binding.stage].append(binding)
        logger.debug(
            "Registered %s -> %s at %s", binding.label, binding.target, binding.stage.value
        )

    def seal(self) -> None:
        """Freeze the binding table. Further registration is a configuration error."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def subscribe(self, bus: LifecycleSubscriber) -> None:
        """Subscribe :meth:`on_stage` to every lifecycle stage on *bus*."""
        for stage in STAGE_ORDER:
            self._subscriptions.append(bus.subscribe(stage, self.on_stage))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def bindings_for(self, stage: LifecycleStage | str) -> tuple[ExtensionBinding, ...]:
        """Bindings registered for *stage*, in registration order."""
        return tuple(self._bindings[parse_stage(stage)])

    def bindings(self) -> list[ExtensionBinding]:
        """All bindings, in stage order then registration order."""
        return [binding for stage in STAGE_ORDER for binding in self._bindings[stage]]

    def __len__(self) -> int:
        return sum(len(bindings) for bindings in self._bindings.values())

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def on_stage(self, stage: LifecycleStage | str) -> None:
        """Apply every binding registered for *stage*, in registration order.

        Stops at the first failure.

        Raises:
            ConfigurationError: If an action reports a configuration problem.
            AttachmentError: If a capability cannot be attached or an
                action capability fails.
        """
        resolved = parse_stage(stage)
        bindings = self._bindings[resolved]
        with structlog.contextvars.bound_contextvars(stage=resolved.value):
            logger.debug("Applying %d binding(s) for %s", len(bindings), resolved.value)
            for binding in bindings:
                self._apply(binding)

    def _apply(self, binding: ExtensionBinding) -> None:
        try:
            if binding.is_mixin:
                self._attacher.attach(binding.target, binding.capability)  # type: ignore[arg-type]
            else:
                binding.capability()
        except (AttachmentError, ConfigurationError):
            raise
        except Exception as exc:
            raise AttachmentError(binding.target, binding.label, str(exc)) from exc
        logger.debug("Applied %s -> %s", binding.label, binding.target)
