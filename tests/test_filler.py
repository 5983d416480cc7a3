from __future__ import annotations

import unittest
from unittest.mock import patch

from contracts.errors import AssemblyError
from size_target.filler import filler_bytes, find_jpeg_end, pad_to_size


class TestFillerBytes(unittest.TestCase):
    def test_byte_at_offset_is_offset_mod_255(self) -> None:
        self.assertEqual(filler_bytes(0, 5), bytes([0, 1, 2, 3, 4]))
        self.assertEqual(filler_bytes(253, 4), bytes([253, 254, 0, 1]))
        self.assertEqual(filler_bytes(510, 2), bytes([0, 1]))

        start = 41_337
        out = filler_bytes(start, 1000)
        self.assertEqual(len(out), 1000)
        self.assertTrue(all(b == (start + i) % 255 for i, b in enumerate(out)))

    def test_never_emits_marker_prefix(self) -> None:
        self.assertNotIn(0xFF, filler_bytes(12_345, 3 * 255 + 17))

    def test_non_degenerate(self) -> None:
        for start in (0, 1, 254, 255, 100_000):
            self.assertEqual(len(set(filler_bytes(start, 2))), 2)
        # No two neighbouring bytes are ever equal, so there are no constant runs at all.
        out = filler_bytes(9, 5000)
        self.assertTrue(all(a != b for a, b in zip(out, out[1:])))

    def test_zero_and_negative_length(self) -> None:
        self.assertEqual(filler_bytes(100, 0), b"")
        with self.assertRaises(ValueError):
            filler_bytes(0, -1)


class TestPadToSize(unittest.TestCase):
    def test_exact_length_and_prefix_preserved(self) -> None:
        stream = b"\xff\xd8" + b"abc" + b"\xff\xd9"
        out = pad_to_size(stream, 64)
        self.assertEqual(len(out), 64)
        self.assertEqual(out[: len(stream)], stream)
        self.assertEqual(out[len(stream):], filler_bytes(len(stream), 64 - len(stream)))
        self.assertEqual(find_jpeg_end(out), len(stream))

    def test_same_length_is_noop(self) -> None:
        stream = b"\xff\xd8\xff\xd9"
        self.assertEqual(pad_to_size(stream, len(stream)), stream)

    def test_smaller_target_rejected(self) -> None:
        with self.assertRaises(ValueError):
            pad_to_size(b"\xff\xd8\xff\xd9", 2)

    def test_allocation_failure_is_assembly_error(self) -> None:
        with patch("size_target.filler.filler_bytes", side_effect=MemoryError):
            with self.assertRaises(AssemblyError) as ctx:
                pad_to_size(b"\xff\xd8\xff\xd9", 10_000)
        self.assertEqual(ctx.exception.code, "PHOTO_ASSEMBLY_FAILED")
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)


class TestFindJpegEnd(unittest.TestCase):
    def test_not_a_jpeg(self) -> None:
        self.assertEqual(find_jpeg_end(b""), -1)
        self.assertEqual(find_jpeg_end(b"\x89PNG\r\n\x1a\n"), -1)
        self.assertEqual(find_jpeg_end(b"\xff\xd8 no end marker"), -1)

    def test_end_marker_position(self) -> None:
        self.assertEqual(find_jpeg_end(b"\xff\xd8xx\xff\xd9"), 6)


if __name__ == "__main__":
    unittest.main()
