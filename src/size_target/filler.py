from __future__ import annotations

from contracts.errors import AssemblyError

JPEG_SOI = b"\xff\xd8"
JPEG_EOI = b"\xff\xd9"

# One period of the filler sequence: 0x00..0xFE. 0xFF never appears, so no
# filler run can be mistaken for a JPEG marker.
_FILLER_PERIOD = bytes(range(255))


def filler_bytes(start_offset: int, length: int) -> bytes:
    """
    Deterministic, non-constant filler: the byte at absolute file offset `i` is `i % 255`.
    """

    if length < 0:
        raise ValueError("length must be >= 0")
    if start_offset < 0:
        raise ValueError("start_offset must be >= 0")
    if length == 0:
        return b""

    phase = start_offset % len(_FILLER_PERIOD)
    rotated = _FILLER_PERIOD[phase:] + _FILLER_PERIOD[:phase]
    repeats, rest = divmod(length, len(rotated))
    return rotated * repeats + rotated[:rest]


def pad_to_size(stream: bytes, target_length: int) -> bytes:
    """
    Append filler after `stream` so the result is exactly `target_length` bytes.
    """

    padding = target_length - len(stream)
    if padding < 0:
        raise ValueError("target_length is smaller than the stream")
    try:
        return stream + filler_bytes(len(stream), padding)
    except (MemoryError, OverflowError) as e:
        raise AssemblyError(
            "Padding buffer could not be allocated",
            detail={"stream_length": len(stream), "target_length": target_length},
        ) from e


def find_jpeg_end(data: bytes) -> int:
    """
    Return the logical JPEG length: the offset just past the last end-of-image marker.

    Returns -1 when `data` does not look like a complete JPEG stream.
    """

    if not data.startswith(JPEG_SOI):
        return -1
    idx = data.rfind(JPEG_EOI)
    if idx < len(JPEG_SOI):
        return -1
    return idx + len(JPEG_EOI)
