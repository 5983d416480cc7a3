from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from _images import decode_pixels, encode, gradient_image
from contracts.photo import FitMode
from id_photo.cli import main
from id_photo.settings import _load_env_file, get_settings
from size_target.contracts import OversizePolicy

_ENV_KEYS = (
    "ID_PHOTO_WIDTH",
    "ID_PHOTO_HEIGHT",
    "ID_PHOTO_MIN_KB",
    "ID_PHOTO_MAX_KB",
    "ID_PHOTO_PREFERRED_KB",
    "ID_PHOTO_FIT_MODE",
    "ID_PHOTO_OVERSIZE_POLICY",
    "LOG_LEVEL",
)


class _CleanEnv(unittest.TestCase):
    def setUp(self) -> None:
        saved = {k: os.environ.pop(k) for k in _ENV_KEYS if k in os.environ}
        self.addCleanup(os.environ.update, saved)
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)
        env_file = patch("id_photo.settings._load_env_file")
        env_file.start()
        self.addCleanup(env_file.stop)


class TestSettings(_CleanEnv):
    def test_defaults(self) -> None:
        s = get_settings()
        t = s.target_spec()
        self.assertEqual((t.width, t.height), (295, 413))
        self.assertEqual((t.min_bytes, t.preferred_bytes, t.max_bytes), (150 * 1024, 200 * 1024, 250 * 1024))
        self.assertEqual(s.fit_mode, FitMode.STRETCH)
        self.assertEqual(s.oversize_policy, OversizePolicy.PASSTHROUGH)

    def test_env_overrides(self) -> None:
        env = {
            "ID_PHOTO_WIDTH": "358",
            "ID_PHOTO_HEIGHT": "441",
            "ID_PHOTO_MIN_KB": "20",
            "ID_PHOTO_MAX_KB": "60",
            "ID_PHOTO_PREFERRED_KB": "40",
            "ID_PHOTO_FIT_MODE": "cover",
            "ID_PHOTO_OVERSIZE_POLICY": "reduce_quality",
        }
        with patch.dict(os.environ, env):
            s = get_settings()
        t = s.target_spec()
        self.assertEqual((t.width, t.height, t.preferred_bytes), (358, 441, 40 * 1024))
        self.assertEqual(s.fit_mode, FitMode.COVER)
        self.assertEqual(s.oversize_policy, OversizePolicy.REDUCE_QUALITY)

    def test_bad_integer(self) -> None:
        with patch.dict(os.environ, {"ID_PHOTO_WIDTH": "wide"}):
            with self.assertRaises(ValueError):
                get_settings()

    def test_env_file_fills_only_missing_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, patch.dict(os.environ, {"ID_PHOTO_WIDTH": "300"}):
            env_path = Path(tmp) / ".env"
            env_path.write_text("# local overrides\nID_PHOTO_WIDTH=400\nID_PHOTO_HEIGHT=500\n", encoding="utf-8")

            _load_env_file(str(env_path))

            self.assertEqual(os.environ["ID_PHOTO_WIDTH"], "300")
            self.assertEqual(os.environ["ID_PHOTO_HEIGHT"], "500")


class TestCli(_CleanEnv):
    def test_writes_padded_artifact_and_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            src = root / "photo.png"
            src.write_bytes(encode(gradient_image((800, 600)), "PNG"))
            out_dir = root / "out"
            manifest = root / "manifest.json"

            with patch("builtins.print") as printed:
                code = main([str(src), "--out-dir", str(out_dir), "--out-manifest", str(manifest), "--preferred-kb", "180"])

            self.assertEqual(code, 0)
            summary = printed.call_args.args[0]
            outputs = sorted(out_dir.glob("id_photo_180kb_*.jpg"))
            self.assertEqual(len(outputs), 1)
            data = outputs[0].read_bytes()
            self.assertEqual(decode_pixels(data)[0], (295, 413))

            d = json.loads(manifest.read_text(encoding="utf-8"))
            self.assertTrue(d["ok"])
            self.assertEqual(d["artifact"]["total_length"], len(data))
            self.assertTrue(summary.startswith(f"size={len(data)} target={180 * 1024} ok=True "), summary)
            if d["artifact"]["baseline_length"] < 180 * 1024:
                self.assertEqual(len(data), 180 * 1024)

    def test_undecodable_input_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            src = root / "notes.txt"
            src.write_text("hello", encoding="utf-8")
            out_dir = root / "out"

            with patch("builtins.print") as printed, self.assertLogs("id_photo.pipeline", level="ERROR"):
                code = main([str(src), "--out-dir", str(out_dir)])

            self.assertEqual(code, 2)
            self.assertEqual(printed.call_args.args[0], f"size=0 target={200 * 1024} ok=False error=PHOTO_DECODE_FAILED")
            self.assertFalse(out_dir.exists())

    def test_missing_input_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("id_photo.cli", level="ERROR"):
                code = main([str(Path(tmp) / "missing.jpg"), "--out-dir", tmp])
        self.assertEqual(code, 2)

    def test_invalid_window_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                main([str(Path(tmp) / "x.jpg"), "--out-dir", tmp, "--min-kb", "300"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
