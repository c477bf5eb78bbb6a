"""Grouped bar chart geometry for the attendance trend widget."""

from __future__ import annotations

from typing import Sequence

from hr_dashboard.attendance.schemas import TrendPoint
from hr_dashboard.common.dates import short_date_label
from hr_dashboard.dashboard.schemas import ChartBar, ChartGroup, StatusChart

CHART_WIDTH = 620
CHART_HEIGHT = 220
GRID_TICKS = (0.25, 0.5, 0.75, 1.0)
GROUP_FILL = 0.7  # share of each date slot covered by its bars
SERIES = ("present", "absent", "no_info")
LEGEND = {"present": "Present", "absent": "Absent", "no_info": "No info"}


def build_status_chart(
    points: Sequence[TrendPoint],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> StatusChart:
    """Lay out one group of three bars per date, scaled to the largest count."""
    max_value = max([1] + [getattr(p, s) for p in points for s in SERIES])
    group_width = width / max(len(points), 1)
    inner_width = group_width * GROUP_FILL
    bar_width = inner_width / len(SERIES)

    groups: list[ChartGroup] = []
    for index, point in enumerate(points):
        start = index * group_width + (group_width - inner_width) / 2
        bars = []
        for offset, series in enumerate(SERIES):
            bar_height = getattr(point, series) / max_value * height
            bars.append(
                ChartBar(
                    series=series,
                    x=start + bar_width * offset,
                    y=height - bar_height,
                    width=bar_width - 1,
                    height=bar_height,
                )
            )
        label_x = index * width / (len(points) - 1) if len(points) > 1 else width / 2
        groups.append(
            ChartGroup(
                date=point.date,
                label=short_date_label(point.date),
                label_x=label_x,
                bars=bars,
            )
        )

    return StatusChart(
        width=width,
        height=height,
        max_value=max_value,
        grid_lines=[height - tick * height for tick in GRID_TICKS],
        groups=groups,
        legend=dict(LEGEND),
    )
