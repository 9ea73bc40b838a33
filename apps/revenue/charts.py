from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field

from django.template.loader import render_to_string

PADDING = 40
Y_TICKS = (0, 0.25, 0.5, 0.75, 1)
MAX_X_LABELS = 8


@dataclass
class ChartGeometry:
    width: int
    height: int
    min_value: float = 0.0
    max_value: float = 0.0
    x_scale: float = 0.0
    y_scale: float = 0.0
    points: list[dict] = field(default_factory=list)
    y_ticks: list[dict] = field(default_factory=list)
    x_labels: list[dict] = field(default_factory=list)

    @property
    def path(self) -> str:
        return " ".join(
            f"{'M' if i == 0 else 'L'} {_num(p['x'])} {_num(p['y'])}" for i, p in enumerate(self.points)
        )

    @property
    def empty(self) -> bool:
        return not self.points


def _num(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def _short_date(iso: str) -> str:
    try:
        d = dt.date.fromisoformat(iso)
    except ValueError:
        return iso
    return f"{d:%b} {d.day}"


def chart_geometry(series: list[dict], width: int = 800, height: int = 300) -> ChartGeometry:
    """Linear pixel scales for a {date, amount} series, min value at the bottom edge."""
    geo = ChartGeometry(width=width, height=height)
    if not series:
        return geo
    amounts = [float(p["amount"]) for p in series]
    geo.min_value, geo.max_value = min(amounts), max(amounts)
    n = len(series)
    geo.x_scale = (width - 2 * PADDING) / (n - 1) if n > 1 else 0.0
    geo.y_scale = (height - 2 * PADDING) / ((geo.max_value - geo.min_value) or 1)

    for i, p in enumerate(series):
        amount = float(p["amount"])
        x = PADDING + i * geo.x_scale
        y = height - PADDING - (amount - geo.min_value) * geo.y_scale
        geo.points.append({
            "x": x,
            "y": y,
            "cx": _num(x),
            "cy": _num(y),
            "title": f"{p['date']}: ${amount:.2f}",
        })

    for ratio in Y_TICKS:
        value = geo.min_value + (geo.max_value - geo.min_value) * ratio
        y = height - PADDING - ratio * (height - 2 * PADDING)
        geo.y_ticks.append({"y": _num(y), "text_y": _num(y + 4), "label": f"${value:.0f}"})

    step = math.ceil(n / MAX_X_LABELS)
    for i, p in enumerate(series):
        if i % step == 0:
            geo.x_labels.append({"x": _num(PADDING + i * geo.x_scale), "label": _short_date(p["date"])})
    return geo


def render_line_chart(series: list[dict], width: int = 800, height: int = 300) -> str:
    geo = chart_geometry(series, width, height)
    axis = {
        "left": PADDING,
        "tick_x": PADDING - 5,
        "label_x": PADDING - 10,
        "bottom": height - PADDING,
        "tick_bottom": height - PADDING + 5,
        "label_bottom": height - PADDING + 20,
    }
    return render_to_string("revenue/line_chart.svg", {"geo": geo, "axis": axis})
