from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from PIL import Image

from ..contracts import NormalizeImageConfig


@dataclass(frozen=True, slots=True)
class EngineDecodedImage:
    image: Image.Image  # fully loaded, detached from the input buffer
    source_format: str
    decode_params: dict[str, Any]


class SourceDecoder(ABC):
    """
    Stage 0 decoding backend abstraction.

    Decoders must:
    - Turn raw input bytes into a fully loaded Pillow image
    - Be deterministic for a given input+params
    - Raise `contracts.errors.DecodeError` for anything they cannot decode
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def accepts(self, data: bytes) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decode(self, data: bytes, *, config: NormalizeImageConfig) -> EngineDecodedImage:
        raise NotImplementedError
