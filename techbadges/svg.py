"""SVG grid generation.

Icons are laid out row-major on a GRID_CELL pitch. The viewBox keeps the
source units while width/height are scaled down by SCALE, so a single
icon renders ONE_ICON pixels wide.
"""

import math
import re
from dataclasses import dataclass
from typing import Mapping, Sequence
from xml.sax.saxutils import escape

from techbadges.config.constants import GRID_CELL, GRID_GAP, SCALE

EMPTY_SVG = '<svg width="0" height="0" xmlns="http://www.w3.org/2000/svg"></svg>'

_THEME_SUFFIX = re.compile(r"-(dark|light)$", re.IGNORECASE)
_SVG_OPEN = re.compile(r"<svg[^>]*>")

DISPLAY_NAMES = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "nodejs": "Node.js",
    "vuejs": "Vue.js",
    "nuxtjs": "Nuxt.js",
    "nextjs": "Next.js",
    "nestjs": "NestJS",
    "expressjs": "Express.js",
    "dotnet": ".NET",
    "cpp": "C++",
    "cs": "C#",
    "mongodb": "MongoDB",
    "postgresql": "PostgreSQL",
    "mysql": "MySQL",
    "graphql": "GraphQL",
    "github": "GitHub",
    "gitlab": "GitLab",
    "vscode": "VS Code",
    "webassembly": "WebAssembly",
    "openai": "OpenAI",
    "pytorch": "PyTorch",
    "tensorflow": "TensorFlow",
    "aws": "AWS",
    "gcp": "GCP",
    "dbt": "dbt",
    "airflow": "Airflow",
    "powershell": "PowerShell",
    "linkedin": "LinkedIn",
    "stackoverflow": "Stack Overflow",
    "huggingface": "Hugging Face",
    "langchain": "LangChain",
}


@dataclass(frozen=True)
class GridGeometry:
    """Layout numbers for one grid."""

    columns: int
    rows: int
    width: int  # viewBox units
    height: int

    @property
    def scaled_width(self) -> float:
        return self.width * SCALE

    @property
    def scaled_height(self) -> float:
        return self.height * SCALE


def grid_geometry(count: int, per_line: int) -> GridGeometry:
    """Compute the grid for count icons at per_line icons per row.

    The trailing gap after the last column/row is trimmed, so one icon
    occupies GRID_CELL - GRID_GAP units on each side.
    """
    columns = min(per_line, count)
    rows = math.ceil(count / per_line)
    return GridGeometry(
        columns=columns,
        rows=rows,
        width=columns * GRID_CELL - GRID_GAP,
        height=rows * GRID_CELL - GRID_GAP,
    )


def format_display_name(icon_name: str) -> str:
    """Human-readable name for a registry key, used as the icon tooltip."""
    base_name = _THEME_SUFFIX.sub("", icon_name)
    if base_name in DISPLAY_NAMES:
        return DISPLAY_NAMES[base_name]
    return base_name[:1].upper() + base_name[1:]


def generate_svg(icon_names: Sequence[str], icons: Mapping[str, str], per_line: int) -> str:
    """Generate an SVG grid containing multiple icons.

    Args:
        icon_names: Registry keys to include, already resolved
        icons: Icon registry (key -> SVG markup)
        per_line: Icons per row, already validated

    Returns:
        Complete SVG document. A key missing from the registry leaves its
        cell empty; an empty list gives a 0x0 document.
    """
    if not icon_names:
        return EMPTY_SVG

    geometry = grid_geometry(len(icon_names), per_line)

    parts = [
        f'<svg width="{_num(geometry.scaled_width)}" height="{_num(geometry.scaled_height)}" '
        f'viewBox="0 0 {geometry.width} {geometry.height}" fill="none" '
        f'xmlns="http://www.w3.org/2000/svg" version="1.1">'
    ]

    for i, icon_name in enumerate(icon_names):
        icon_svg = icons.get(icon_name) if icon_name else None
        if not icon_svg:
            continue

        x = (i % per_line) * GRID_CELL
        y = (i // per_line) * GRID_CELL
        title = escape(format_display_name(icon_name))
        parts.append(f'<g transform="translate({x},{y})"><title>{title}</title>{icon_svg}</g>')

    parts.append("</svg>")
    return "".join(parts)


def extract_svg_content(svg: str) -> str:
    """Strip the outer <svg> wrapper, leaving its inner markup."""
    without_open = _SVG_OPEN.sub("", svg, count=1)
    return without_open.replace("</svg>", "", 1)


def _num(value: float) -> str:
    # 48.0 -> "48", 104.25 -> "104.25"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
