from __future__ import annotations

import argparse
import logging
from pathlib import Path

from PIL import ImageColor

from contracts.photo import FitMode, TargetSpec
from normalize_image.contracts import NormalizeImageConfig
from normalize_image.data_access import DataAccessError, read_source_bytes
from size_target.contracts import OversizePolicy, SizeTargetConfig

from .artifacts import write_artifact, write_pipeline_manifest_json
from .logging_config import configure_logging
from .pipeline import run_id_photo_pipeline
from .settings import get_settings

logger = logging.getLogger(__name__)


def _rgb(value: str) -> tuple[int, int, int]:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a colour: {value!r}") from e


def build_arg_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    p = argparse.ArgumentParser(
        prog="id-photo",
        description="Resize a photo to fixed pixel dimensions and a target JPEG byte size.",
    )
    p.add_argument("input", type=Path, help="Source image (JPEG/PNG/WebP/..., or a PDF scan).")
    p.add_argument("--out-dir", required=True, type=Path, help="Explicit output directory.")
    p.add_argument("--out-manifest", type=Path, default=None, help="Optional JSON manifest file.")
    p.add_argument("--width", type=int, default=settings.width, help="Output width in pixels.")
    p.add_argument("--height", type=int, default=settings.height, help="Output height in pixels.")
    p.add_argument("--min-kb", type=int, default=settings.min_kb, help="Lower bound of the size window (KiB).")
    p.add_argument("--max-kb", type=int, default=settings.max_kb, help="Upper bound of the size window (KiB).")
    p.add_argument("--preferred-kb", type=int, default=settings.preferred_kb, help="Exact size to pad to (KiB).")
    p.add_argument(
        "--fit-mode",
        choices=[m.value for m in FitMode],
        default=settings.fit_mode.value,
        help="How the source is placed onto the canvas.",
    )
    p.add_argument("--background", type=_rgb, default=(255, 255, 255), help="Canvas colour, e.g. '#FFFFFF'.")
    p.add_argument(
        "--oversize-policy",
        choices=[m.value for m in OversizePolicy],
        default=settings.oversize_policy.value,
        help="What to do when the maximum-quality encode exceeds --max-kb.",
    )
    p.add_argument("--log-level", default=settings.log_level, help="Logging level (DEBUG, INFO, ...).")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        target = TargetSpec.from_kib(
            width=args.width,
            height=args.height,
            min_kib=args.min_kb,
            max_kib=args.max_kb,
            preferred_kib=args.preferred_kb,
        )
        normalize_config = NormalizeImageConfig(background=args.background, fit_mode=FitMode(args.fit_mode))
        encode_config = SizeTargetConfig(oversize_policy=OversizePolicy(args.oversize_policy))
    except ValueError as e:
        parser.error(str(e))

    try:
        data = read_source_bytes(args.input)
    except DataAccessError as e:
        logger.error("%s", e)
        return 2

    result = run_id_photo_pipeline(
        data, target=target, normalize_config=normalize_config, encode_config=encode_config
    )
    if args.out_manifest is not None:
        write_pipeline_manifest_json(result=result, out_manifest=args.out_manifest)

    if not result.ok or result.artifact is None:
        code = result.errors[0].code if result.errors else "unknown"
        print(f"size=0 target={target.preferred_bytes} ok=False error={code}")
        return 2

    out_file = write_artifact(artifact=result.artifact, out_dir=args.out_dir, preferred_bytes=target.preferred_bytes)
    print(
        f"size={result.artifact.total_length} target={target.preferred_bytes} ok=True "
        f"padding={result.artifact.padding_length} output={out_file}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
