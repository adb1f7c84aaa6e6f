"""
Angular component template 改寫

把 Figma 匯出的 SVG 中以 `$fill(...)` 命名的節點，
改寫成 `[attr.fill]="color('a', 'b')"` 形式的屬性綁定。
"""

from typing import Callable, Optional

from .instructions import Instruction, parse_id
from .markup import dump_svg, load_svg

SIZE_ATTRIBUTES = ("width", "height")


def binding_name(target: str) -> str:
    return f"[attr.{target}]"


def color_expression(args) -> str:
    """`('a', 'b')` -> `color('a', 'b')`"""
    return "color(" + ", ".join(f"'{arg}'" for arg in args) + ")"


def rewrite_node(node, instruction: Instruction) -> None:
    """依指令改寫單一節點；原本的靜態屬性值會成為最後一個參數。"""
    attrib = node.attrib
    if instruction.target in attrib:
        instruction = instruction.with_fallback(attrib.pop(instruction.target))
    attrib[binding_name(instruction.target)] = color_expression(instruction.args)
    del attrib["id"]


def rewrite_template(root, parse: Callable[[str], Optional[Instruction]] = parse_id):
    """Rewrite an SVG element tree in place and return its root.

    The root loses its size attributes so the template scales to its
    container. Elements whose id does not parse are left untouched.
    Only `attrib` and `iter()` are used, so any ElementTree-like node works.
    """
    for name in SIZE_ATTRIBUTES:
        root.attrib.pop(name, None)

    # iter() 會在改寫中途被修改屬性，先收集節點
    for node in list(root.iter()):
        identifier = node.attrib.get("id")
        if identifier is None:
            continue
        instruction = parse(identifier)
        if instruction:
            rewrite_node(node, instruction)
    return root


def render_template(
    svg_text: str,
    load: Callable = load_svg,
    dump: Callable = dump_svg,
) -> str:
    """SVG 文字 → 改寫後的 template 文字。"""
    root = load(svg_text)
    rewrite_template(root)
    return dump(root)
