import re
from datetime import datetime

from lxml import etree

from .platforms import color_for
from .records import format_value

SVG_NS = "http://www.w3.org/2000/svg"

# =======================
#    LAYOUT CONSTANTS
# =======================
PLATFORM_WIDTH = 350
BASE_HEIGHT = 100
FEATURE_ROW_HEIGHT = 25
PADDING_TOP = 20
PADDING_BOTTOM = 30

MARGIN_X = 20          # left edge of labels / swatch
VALUE_X = 320          # right edge of values
SWATCH_SIZE = 40
TITLE_X = 70
ROWS_TOP = PADDING_TOP + 60

SUBTITLE = "Profile Statistics"
FONT_STACK = ("-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, "
              "Cantarell, 'Open Sans', 'Helvetica Neue', sans-serif")

CSS = f"""
.badge-bg {{ fill: #f6f8fa; }}
.platform-title {{ font-family: {FONT_STACK}; }}
.title {{ font-size: 16px; font-weight: bold; fill: #24292e; }}
.subtitle {{ font-size: 12px; fill: #6a737d; }}
.stat-label {{ font-size: 12px; fill: #6a737d; }}
.stat-value {{ font-size: 14px; font-weight: bold; fill: #24292e; }}
"""

# XML 1.0 can't carry most control chars, even escaped
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')


def _clean(text):
    return _CONTROL_CHARS.sub('', str(text).replace('\n', ' '))


def panel_height(feature_count):
    return BASE_HEIGHT + PADDING_TOP + PADDING_BOTTOM + feature_count * FEATURE_ROW_HEIGHT


def format_label(key):
    """'total_contributions' -> 'Total Contributions'. Only first letters change."""
    return re.sub(r'\b\w', lambda m: m.group().upper(), key.replace('_', ' '))


def _el(parent, tag, text=None, **attrs):
    node = etree.SubElement(parent, f"{{{SVG_NS}}}{tag}", {k.replace('_', '-'): str(v) for k, v in attrs.items()})
    if text is not None:
        node.text = _clean(text)
    return node


def _draw_panel(svg, record, index, stamp):
    x = index * PLATFORM_WIDTH
    height = panel_height(record.feature_count)

    g = _el(svg, "g", **{"class": "panel", "data-platform": record.platform, "data-height": height})

    # 1. Background + swatch
    _el(g, "rect", x=x, y=0, width=PLATFORM_WIDTH, height=height, rx=6, ry=6,
        stroke="#e1e4e8", stroke_width=1, **{"class": "badge-bg"})
    _el(g, "rect", x=x + MARGIN_X, y=PADDING_TOP, width=SWATCH_SIZE, height=SWATCH_SIZE,
        rx=6, ry=6, fill=f"#{color_for(record.platform)}")

    # 2. Header
    _el(g, "text", record.platform.replace('_', ' '), x=x + TITLE_X, y=PADDING_TOP + 20,
        font_size=16, font_weight=600, **{"class": "title platform-title"})
    _el(g, "text", SUBTITLE, x=x + TITLE_X, y=PADDING_TOP + 40,
        font_size=12, **{"class": "subtitle platform-title"})

    # 3. Feature rows, in record order
    for row, (key, value) in enumerate(record.fields.items()):
        y = ROWS_TOP + row * FEATURE_ROW_HEIGHT
        _el(g, "text", format_label(key), x=x + MARGIN_X, y=y,
            **{"class": "stat-label platform-title"})
        _el(g, "text", format_value(value), x=x + VALUE_X, y=y, text_anchor="end",
            **{"class": "stat-value platform-title"})
        _el(g, "line", x1=x + MARGIN_X, y1=y + 5, x2=x + VALUE_X, y2=y + 5,
            stroke="#e1e4e8", stroke_width=0.5)

    # 4. Footer
    _el(g, "text", f"Last Updated: {stamp}", x=x + MARGIN_X, y=height - 10,
        font_size=10, **{"class": "subtitle platform-title"})


def render_badge(records, now=None):
    """
    Lay out one 350-wide panel per record, left to right, as an SVG string.

    Each panel gets its own height from its feature count. The root keeps
    height="auto" instead of the tallest panel's height.
    """
    records = list(records)
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    svg = etree.Element(f"{{{SVG_NS}}}svg", {
        "width": str(PLATFORM_WIDTH * len(records)),
        "height": "auto",
    }, nsmap={None: SVG_NS})
    _el(svg, "style").text = CSS

    for i, record in enumerate(records):
        _draw_panel(svg, record, i, stamp)

    return etree.tostring(svg, encoding="unicode")
