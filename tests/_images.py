from __future__ import annotations

import io
import random

from PIL import Image


def encode(image: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt, **params)
    return buf.getvalue()


def decode_pixels(data: bytes) -> tuple[tuple[int, int], bytes]:
    with Image.open(io.BytesIO(data)) as im:
        im.load()
        return im.size, im.tobytes()


def gradient_image(size: tuple[int, int]) -> Image.Image:
    horizontal = Image.linear_gradient("L").rotate(90).resize(size)
    vertical = Image.linear_gradient("L").resize(size)
    return Image.merge("RGB", [horizontal, vertical, Image.new("L", size, 128)])


def noise_image(size: tuple[int, int], *, seed: int = 7) -> Image.Image:
    # Incompressible content: a maximum-quality JPEG of this is larger than the raw pixels.
    rng = random.Random(seed)
    return Image.frombytes("RGB", size, rng.randbytes(size[0] * size[1] * 3))


def solid_image(size: tuple[int, int], color=(10, 120, 200), mode: str = "RGB") -> Image.Image:
    return Image.new(mode, size, color)
