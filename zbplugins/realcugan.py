"""Choice of the Real-CUGAN model from the spell words of a request."""

from __future__ import annotations

REPO = "shichen1231/Real-CUGAN"
MAX_UPSCALE_PIXELS = 400000


def choose_model(spell: str, width: int, height: int) -> tuple[int, str, str]:
    """Return (scale, denoise branch, model file name) for a spell and image size."""
    scale = 2
    small = width * height < MAX_UPSCALE_PIXELS
    if "双重吟唱" in spell:
        scale = 2
    elif "三重吟唱" in spell and small:
        scale = 3
    elif "四重吟唱" in spell and small:
        scale = 4

    con = "conservative"
    if "强力术式" in spell:
        con = "denoise3x"
    elif "中等术式" in spell:
        con = "denoise2x" if scale == 2 else "no-denoise"
    elif "弱术式" in spell:
        con = "denoise1x" if scale == 2 else "no-denoise"
    elif "不变式" in spell:
        con = "no-denoise"
    elif "原式" in spell:
        con = "conservative"
    return scale, con, f"up{scale}x-latest-{con}.pth"