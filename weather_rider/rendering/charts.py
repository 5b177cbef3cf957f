"""
Inline SVG charts.

The output is a self‑contained ``<svg>`` string that can be dropped straight
into a page (the Flask templates mark it ``|safe``).  Text is escaped with
MarkupSafe, the same escaper Jinja uses.
"""

import math
from typing import List, Optional, Sequence

from markupsafe import escape

from ..models import ForecastPeriod
from ..utils.geo import c_to_f

PAD_LEFT = 36
PAD_RIGHT = 12
PAD_TOP = 28
PAD_BOTTOM = 28
MAX_LABELS = 8

BAR_COLOUR = "#38bdf8"
LINE_COLOUR = "#f59e0b"
TEXT_COLOUR = "#94a3b8"


def _open(width: int, height: int, title: str) -> List[str]:
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" role="img" aria-label="{escape(title)}">'
    ]
    if title:
        parts.append(
            f'<text x="{width / 2:.1f}" y="16" text-anchor="middle" font-size="13" '
            f'fill="{TEXT_COLOUR}">{escape(title)}</text>'
        )
    return parts


def _empty(width: int, height: int, title: str) -> str:
    parts = _open(width, height, title)
    parts.append(
        f'<text x="{width / 2:.1f}" y="{height / 2:.1f}" text-anchor="middle" '
        f'font-size="12" fill="{TEXT_COLOUR}">No data</text>'
    )
    parts.append("</svg>")
    return "".join(parts)


def _x_labels(labels: Sequence[str], xs: Sequence[float], height: int) -> List[str]:
    every = max(1, math.ceil(len(labels) / MAX_LABELS))
    return [
        f'<text x="{x:.1f}" y="{height - 8}" text-anchor="middle" font-size="10" '
        f'fill="{TEXT_COLOUR}">{escape(label)}</text>'
        for i, (x, label) in enumerate(zip(xs, labels))
        if i % every == 0
    ]


def _axis_labels(lo: float, hi: float, height: int) -> List[str]:
    return [
        f'<text x="{PAD_LEFT - 4}" y="{PAD_TOP + 4}" text-anchor="end" font-size="10" '
        f'fill="{TEXT_COLOUR}">{hi:g}</text>',
        f'<text x="{PAD_LEFT - 4}" y="{height - PAD_BOTTOM}" text-anchor="end" font-size="10" '
        f'fill="{TEXT_COLOUR}">{lo:g}</text>',
    ]


def bar_chart(
    values: Sequence[Optional[float]],
    labels: Sequence[str],
    width: int = 480,
    height: int = 200,
    title: str = "",
    max_value: Optional[float] = None,
) -> str:
    """Bars rise from zero; ``max_value`` pins the top of the scale (e.g. 100 for percentages)."""
    if not values:
        return _empty(width, height, title)

    data = [v or 0.0 for v in values]
    base = min(0.0, min(data))
    top = max_value if max_value is not None else max(data)
    if top <= base:
        top = base + 1

    plot_w = width - PAD_LEFT - PAD_RIGHT
    plot_h = height - PAD_TOP - PAD_BOTTOM
    slot = plot_w / len(data)
    bar_w = slot * 0.7

    parts = _open(width, height, title)
    xs = []
    for i, value in enumerate(data):
        x = PAD_LEFT + i * slot + (slot - bar_w) / 2
        bar_h = (value - base) / (top - base) * plot_h
        y = PAD_TOP + plot_h - bar_h
        xs.append(x + bar_w / 2)
        parts.append(
            f'<rect x="{x:.1f}" y="{y:.1f}" width="{bar_w:.1f}" height="{bar_h:.1f}" '
            f'rx="2" fill="{BAR_COLOUR}"><title>{escape(f"{value:g}")}</title></rect>'
        )
    parts.extend(_axis_labels(base, top, height))
    parts.extend(_x_labels(labels, xs, height))
    parts.append("</svg>")
    return "".join(parts)


def line_chart(
    values: Sequence[Optional[float]],
    labels: Sequence[str],
    width: int = 480,
    height: int = 200,
    title: str = "",
) -> str:
    """Polyline scaled to the series min/max; a flat series sits at mid height."""
    present = [v for v in values if v is not None]
    if not present:
        return _empty(width, height, title)

    lo, hi = min(present), max(present)
    plot_w = width - PAD_LEFT - PAD_RIGHT
    plot_h = height - PAD_TOP - PAD_BOTTOM
    step = plot_w / (len(values) - 1) if len(values) > 1 else 0.0

    def y_for(value: float) -> float:
        if hi == lo:
            return PAD_TOP + plot_h / 2
        return PAD_TOP + plot_h - (value - lo) / (hi - lo) * plot_h

    xs = [PAD_LEFT + i * step if len(values) > 1 else PAD_LEFT + plot_w / 2 for i in range(len(values))]
    points = [(x, y_for(v)) for x, v in zip(xs, values) if v is not None]

    parts = _open(width, height, title)
    parts.append(
        '<polyline fill="none" stroke="{}" stroke-width="2" points="{}"/>'.format(
            LINE_COLOUR, " ".join(f"{x:.1f},{y:.1f}" for x, y in points)
        )
    )
    for x, y in points:
        parts.append(f'<circle cx="{x:.1f}" cy="{y:.1f}" r="3" fill="{LINE_COLOUR}"/>')
    parts.extend(_axis_labels(round(lo, 1), round(hi, 1), height))
    parts.extend(_x_labels(labels, xs, height))
    parts.append("</svg>")
    return "".join(parts)


def _hour_labels(periods: Sequence[ForecastPeriod]) -> List[str]:
    return [f"{p.time:%H:%M}" for p in periods]


def temperature_chart(periods: Sequence[ForecastPeriod], units: str = "metric") -> str:
    if units == "imperial":
        values = [c_to_f(p.temperature_c) for p in periods]
        title = "Temperature (°F)"
    else:
        values = [p.temperature_c for p in periods]
        title = "Temperature (°C)"
    return line_chart(values, _hour_labels(periods), title=title)


def precipitation_chart(periods: Sequence[ForecastPeriod]) -> str:
    values = [p.precipitation_probability for p in periods]
    return bar_chart(values, _hour_labels(periods), title="Chance of rain (%)", max_value=100)
