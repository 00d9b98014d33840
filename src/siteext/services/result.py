"""Return types shared by every SiteService operation.

Services never raise for expected failures; they return a ServiceResult
with ``ok=False`` and a ServiceError, which the CLI turns into exit code 1.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from siteext.errors import SiteExtError


class ServiceError(BaseModel):
    """Machine-readable failure: a stable ``code``, a message and context."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: SiteExtError) -> ServiceError:
        detail = {
            attr: getattr(exc, attr)
            for attr in ("target", "capability", "destination")
            if getattr(exc, attr, None) is not None
        }
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one operation.

    Attributes:
        ok: False when ``error`` is set.
        op: Operation name; selects the renderer (``"menu"``, ``"check"``).
        data: Payload of a successful operation.
        warnings: Problems that did not stop the operation.
        error: Why the operation failed.
        meta: Extra facts about the run (cycle count, slot version, site section).
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: SiteExtError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
