from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from contracts.photo import KIB, EncodedArtifact

from .contracts import IdPhotoResult


def artifact_filename(*, preferred_bytes: int, now: float | None = None) -> str:
    """
    e.g. `id_photo_200kb_1760000000.jpg` (whole unix seconds).
    """

    ts = int(time.time() if now is None else now)
    return f"id_photo_{preferred_bytes // KIB}kb_{ts}.jpg"


def write_artifact(*, artifact: EncodedArtifact, out_dir: Path, preferred_bytes: int, now: float | None = None) -> Path:
    """
    Write the artifact bytes under an explicit output directory and return the file path.
    """

    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / artifact_filename(preferred_bytes=preferred_bytes, now=now)
    out_file.write_bytes(artifact.data)
    return out_file


def serialize_pipeline_result(result: IdPhotoResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_pipeline_manifest_json(*, result: IdPhotoResult, out_manifest: Path) -> None:
    out_manifest.parent.mkdir(parents=True, exist_ok=True)
    out_manifest.write_text(serialize_pipeline_result(result), encoding="utf-8")
