"""Render an MT19937 stream as an image for visual inspection.

Each pixel takes one 32-bit draw, filled row by row. In ``"L"`` mode the
pixel is the top byte of the draw; in ``"1"`` mode it is the top bit.
Visible stripes, gradients or repeats point at a broken generator.

Images are saved as PNG with the generation parameters embedded in a tEXt
chunk (key: ``mersenne_noise``), so a saved image records how to
regenerate it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from . import batch
from .twister import MT19937

METADATA_KEY = "mersenne_noise"
MODES = ("L", "1")


@dataclass
class NoiseParams:
    seed: int
    width: int
    height: int
    mode: str = "L"
    skip: int = 0

    @staticmethod
    def from_dict(d: dict) -> NoiseParams:
        return NoiseParams(
            seed=d["seed"],
            width=d["width"],
            height=d["height"],
            mode=d.get("mode", "L"),
            skip=d.get("skip", 0),
        )

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "mode": self.mode,
            "skip": self.skip,
        }


def render_noise(
    rng: MT19937, width: int, height: int, mode: str = "L"
) -> Image.Image:
    """Draw ``width * height`` values from ``rng`` into a new image.

    Raises ValueError for non-positive dimensions or an unsupported mode.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size: {width}x{height}")
    if mode not in MODES:
        raise ValueError(f"Unsupported mode {mode!r}, expected one of {MODES}")

    words = batch.random_raw(rng, width * height).reshape(height, width)
    if mode == "L":
        return Image.fromarray((words >> np.uint32(24)).astype(np.uint8))
    bits = (words >> np.uint32(31)).astype(np.uint8) * np.uint8(255)
    return Image.fromarray(bits).convert("1", dither=Image.Dither.NONE)


def render_params(params: NoiseParams) -> Image.Image:
    """Seed a fresh generator, skip ``params.skip`` draws and render."""
    rng = MT19937(params.seed)
    if params.skip:
        batch.discard(rng, params.skip)
    return render_noise(rng, params.width, params.height, params.mode)


def save_noise_png(img: Image.Image, params: NoiseParams, path: str) -> None:
    """Save a rendered image with ``params`` embedded as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(params.to_dict()))
    img.save(path, pnginfo=info)


def load_noise_params(path: str) -> NoiseParams:
    """Read the generation parameters back from a saved PNG.

    Raises ValueError if the PNG does not contain noise metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"PNG file does not contain noise metadata (missing '{METADATA_KEY}' chunk)"
            )
        return NoiseParams.from_dict(json.loads(text_data[METADATA_KEY]))
