"""
figma-angular — Figma component SVG → Angular component template

依圖層 id 的 `$fill(...)` 命名慣例，把 SVG 的靜態 fill 改寫成
`[attr.fill]="color(...)"` 屬性綁定。
"""

__version__ = "0.1.0"

from .instructions import SUPPORTED_TARGETS, Instruction, parse_id
from .markup import dump_svg, load_svg
from .template import render_template, rewrite_template
from .figma_reader import FigmaAPIClient, FigmaDocument, FigmaExportError
from .config import ComponentError, load_components_json, load_config, resolve_access_token

__all__ = [
    "__version__",
    "SUPPORTED_TARGETS",
    "Instruction",
    "parse_id",
    "load_svg",
    "dump_svg",
    "rewrite_template",
    "render_template",
    "FigmaAPIClient",
    "FigmaDocument",
    "FigmaExportError",
    "ComponentError",
    "load_components_json",
    "load_config",
    "resolve_access_token",
]
