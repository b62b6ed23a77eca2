"""Renderer-facing configuration derived from a sequence.

Nothing here draws anything. These helpers turn catalog order and
observed counts into plain, JSON-ready dicts a plotting layer reads for
axis and legend ordering. Whether empty levels are shown is the
renderer's choice (``show_empty``); the sequence itself keeps them.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .counting import level_counts
from .factor import CategoricalSequence

_CHAR_PX = 7            # approx width per character of a tick label
_LABEL_PAD = 16         # padding around a tick label
_MIN_AXIS_PX = 30       # absolute floor for the label gutter
_MAX_AXIS_PX = 240      # long labels are truncated by the renderer past this


def axis_config(seq: CategoricalSequence, show_empty: bool = True) -> Dict[str, Any]:
    """Levels and counts for a categorical axis, in catalog order."""
    counts = level_counts(seq)
    levels: List[str] = []
    shown_counts: List[int] = []
    empty_levels: List[str] = []
    for label, n in zip(seq.catalog, counts.tolist()):
        if n == 0:
            empty_levels.append(label)
            if not show_empty:
                continue
        levels.append(label)
        shown_counts.append(n)
    return {
        'levels': levels,
        'counts': shown_counts,
        'empty_levels': empty_levels,
        'missing_count': seq.n_missing,
        'show_empty': show_empty,
    }


def legend_order(seq: CategoricalSequence, reverse: bool = False) -> List[str]:
    """Level labels in the order a legend lists them."""
    labels = list(seq.catalog)
    return labels[::-1] if reverse else labels


def estimate_label_width_px(levels: List[str]) -> int:
    """Estimate the pixel width of the widest tick label."""
    widest = max((len(lbl) for lbl in levels), default=1)
    width = widest * _CHAR_PX + _LABEL_PAD
    return max(_MIN_AXIS_PX, min(width, _MAX_AXIS_PX))


def bar_config(seq: CategoricalSequence, show_empty: bool = True, horizontal: bool = False) -> Dict[str, Any]:
    """Bar chart config: one bar per level, drawn in catalog order.

    Horizontal bars list the first level at the top, so the axis order is
    reversed for renderers that draw the category axis bottom-up.
    """
    axis = axis_config(seq, show_empty=show_empty)
    config: Dict[str, Any] = {
        'chart_type': 'bar',
        'orientation': 'horizontal' if horizontal else 'vertical',
        'axis': axis,
    }
    if horizontal:
        config['axis_order'] = axis['levels'][::-1]
        config['label_width_px'] = estimate_label_width_px(axis['levels'])
    else:
        config['axis_order'] = list(axis['levels'])
    return config
