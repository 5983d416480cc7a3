from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from contracts.photo import EncodedArtifact, TargetSpec


@dataclass(frozen=True, slots=True)
class IdPhotoError:
    code: str
    stage: str
    message: str  # user-facing, generic
    detail: dict[str, Any] | None = None  # diagnostics only


@dataclass(frozen=True, slots=True)
class IdPhotoResult:
    """
    Outcome of one pipeline invocation.

    Either `ok` is True and `artifact` holds the complete output, or `ok` is
    False, `artifact` is None and `errors` explains why. There is no partial success.
    """

    ok: bool
    target: TargetSpec
    artifact: EncodedArtifact | None
    errors: list[IdPhotoError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "target": self.target.to_dict(),
            "artifact": None if self.artifact is None else self.artifact.to_dict(),
            "errors": [
                {"code": e.code, "stage": e.stage, "message": e.message, "detail": e.detail} for e in self.errors
            ],
            "meta": self.meta,
        }
