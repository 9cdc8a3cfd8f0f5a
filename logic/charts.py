"""Chart images for the result panels.

Everything is drawn with Pillow so the frames can show charts through
`ImageTk.PhotoImage` without a plotting toolkit. Each function returns an RGBA
image; callers resize or wrap it as they like.
"""

from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from logic.formatting import gauge_variant

BAR_COLORS = ["#3b82f6", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef"]
VARIANT_COLORS = {
    "primary": "#3b82f6",
    "success": "#22c55e",
    "warning": "#f59e0b",
    "danger": "#ef4444",
}
TRACK = "#1f2937"
TEXT = "#e5e7eb"
MUTED = "#94a3b8"
BG = (15, 23, 42, 255)   # card background


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(float(v), hi))


def _font():
    return ImageFont.load_default()


def bar_chart(data: Sequence[Tuple[str, float]], size=(420, 150), percentage: bool = True) -> Image.Image:
    """
    Horizontal bars, one per (label, score).

    With `percentage`, scores are fractions (0..1) shown on a 0-100% axis;
    otherwise the axis runs up to the largest value.
    """
    w, h = size
    img = Image.new("RGBA", size, BG)
    if not data:
        return img
    draw = ImageDraw.Draw(img)
    font = _font()

    if percentage:
        values = [_clamp(score, 0.0, 1.0) * 100 for _, score in data]
        top = 100.0
    else:
        values = [max(float(score), 0.0) for _, score in data]
        top = max(values) or 1.0

    left, right = 110, w - 50
    row_h = h / len(data)
    bar_h = max(4, int(row_h * 0.55))
    for i, ((label, _), value) in enumerate(zip(data, values)):
        cy = int(row_h * i + row_h / 2)
        draw.text((8, cy - 6), str(label)[:16], fill=TEXT, font=font)
        draw.rectangle([left, cy - bar_h // 2, right, cy + bar_h // 2], fill=TRACK)
        x1 = left + int((right - left) * value / top)
        if x1 > left:
            draw.rectangle([left, cy - bar_h // 2, x1, cy + bar_h // 2],
                           fill=BAR_COLORS[i % len(BAR_COLORS)])
        shown = f"{int(round(value))}%" if percentage else f"{value:g}"
        draw.text((right + 6, cy - 6), shown, fill=MUTED, font=font)
    return img


def gauge_chart(value: float, size: int = 200, variant: str = None) -> Image.Image:
    """Semicircle gauge for a 0-100 value; color follows the value unless `variant` is given."""
    value = _clamp(value, 0, 100)
    color = VARIANT_COLORS[variant or gauge_variant(value)]
    height = size // 2 + 30
    img = Image.new("RGBA", (size, height), BG)
    draw = ImageDraw.Draw(img)

    pad = 10
    box = [pad, pad, size - pad, size - pad]
    width = max(6, size // 12)
    draw.arc(box, start=180, end=360, fill=TRACK, width=width)
    if value > 0:
        draw.arc(box, start=180, end=180 + 180 * value / 100.0, fill=color, width=width)

    font = _font()
    text = f"{int(round(value))}"
    tw = draw.textlength(text, font=font)
    draw.text(((size - tw) / 2, size // 2 - 14), text, fill=TEXT, font=font)
    return img


def line_chart(points: Sequence[Tuple[str, float]], size=(420, 180), y_max: float = 100.0) -> Image.Image:
    """Polyline over labelled points with a soft area fill underneath."""
    w, h = size
    img = Image.new("RGBA", size, BG)
    if not points:
        return img
    draw = ImageDraw.Draw(img, "RGBA")
    font = _font()

    left, right, top, bottom = 30, w - 20, 12, h - 24
    values = np.clip(np.array([v for _, v in points], dtype=float), 0, y_max)
    if len(points) == 1:
        xs = np.array([(left + right) / 2.0])
    else:
        xs = np.linspace(left, right, len(points))
    ys = bottom - (values / y_max) * (bottom - top)

    for frac in (0.0, 0.5, 1.0):
        gy = bottom - frac * (bottom - top)
        draw.line([(left, gy), (right, gy)], fill=TRACK, width=1)

    coords: List[Tuple[float, float]] = list(zip(xs.tolist(), ys.tolist()))
    if len(coords) > 1:
        draw.polygon(coords + [(coords[-1][0], bottom), (coords[0][0], bottom)], fill=(239, 68, 68, 50))
        draw.line(coords, fill=VARIANT_COLORS["danger"], width=3)
    for (x, y), (label, _) in zip(coords, points):
        draw.ellipse([x - 4, y - 4, x + 4, y + 4], fill=VARIANT_COLORS["danger"])
        tw = draw.textlength(str(label), font=font)
        draw.text((x - tw / 2, bottom + 6), str(label), fill=MUTED, font=font)
    return img


def progress_bar(value: float, size=(300, 14), variant: str = "primary") -> Image.Image:
    w, h = size
    img = Image.new("RGBA", size, BG)
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle([0, 0, w - 1, h - 1], radius=h // 2, fill=TRACK)
    filled = int((w - 1) * _clamp(value, 0, 100) / 100.0)
    if filled > 0:
        draw.rounded_rectangle([0, 0, filled, h - 1], radius=h // 2, fill=VARIANT_COLORS[variant])
    return img


def stage_bar(labels: Sequence[str], current: int, size=(420, 50)) -> Image.Image:
    """Stepped progress through escalation stages; `current` of -1 highlights nothing."""
    w, h = size
    img = Image.new("RGBA", size, BG)
    if not labels:
        return img
    draw = ImageDraw.Draw(img)
    font = _font()
    seg = w / len(labels)
    for i, label in enumerate(labels):
        x0, x1 = int(i * seg) + 2, int((i + 1) * seg) - 2
        if i < current:
            fill = VARIANT_COLORS["warning"]
        elif i == current:
            fill = VARIANT_COLORS["danger"]
        else:
            fill = TRACK
        draw.rectangle([x0, 4, x1, 14], fill=fill)
        tw = draw.textlength(label, font=font)
        draw.text((x0 + (x1 - x0 - tw) / 2, 22), label, fill=TEXT if i == current else MUTED, font=font)
    return img
