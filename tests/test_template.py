"""
rewrite_template / render_template 測試
以 ElementTree 與假 DOM 節點驗證改寫結果；斷言屬性值，不比對整段字串。
"""
import xml.etree.ElementTree as ET

import pytest

from figma_angular.markup import SVG_NAMESPACE, dump_svg, load_svg
from figma_angular.template import color_expression, render_template, rewrite_template

SVG_NS = {"svg": SVG_NAMESPACE}


def rewrite(svg_text: str) -> ET.Element:
    return rewrite_template(load_svg(svg_text))


# ─── helper: 最小假 DOM，只提供 attrib 與 iter() ─────────────────────────────

class FakeElement:
    def __init__(self, attrib=None, children=None):
        self.attrib = dict(attrib or {})
        self.children = children or []

    def iter(self):
        yield self
        for child in self.children:
            yield from child.iter()


# ─── color_expression ───────────────────────────────────────────────────────

def test_color_expression_quotes_each_arg():
    assert color_expression(("a", "b", "#fff")) == "color('a', 'b', '#fff')"


def test_color_expression_single_arg():
    assert color_expression(("iconColor",)) == "color('iconColor')"


# ─── fill 改寫 ──────────────────────────────────────────────────────────────

class TestFillRewrite:
    def test_existing_fill_becomes_fallback(self):
        root = rewrite('<svg><path id="$fill(a,b)" fill="#fff"/></svg>')
        path = root.find("path")
        assert path.get("[attr.fill]") == "color('a', 'b', '#fff')"
        assert "fill" not in path.attrib
        assert "id" not in path.attrib

    def test_no_fill_no_fallback(self):
        root = rewrite('<svg><path id="$fill(a,b)" d="M0 0"/></svg>')
        path = root.find("path")
        assert path.get("[attr.fill]") == "color('a', 'b')"
        assert "id" not in path.attrib
        assert path.get("d") == "M0 0"

    def test_whitespace_in_id(self):
        root = rewrite('<svg><rect id="$fill(primary,  secondary)"/></svg>')
        assert root.find("rect").get("[attr.fill]") == "color('primary', 'secondary')"

    def test_nested_nodes_rewritten(self):
        root = rewrite(
            '<svg><g id="group"><g><circle id="$fill(dot)" fill="red"/></g></g></svg>'
        )
        circle = root.find(".//circle")
        assert circle.get("[attr.fill]") == "color('dot', 'red')"
        assert root.find("g").get("id") == "group"

    def test_stroke_attribute_untouched(self):
        root = rewrite('<svg><path id="$fill(a)" stroke="#000" fill="#111"/></svg>')
        path = root.find("path")
        assert path.get("stroke") == "#000"
        assert path.get("[attr.fill]") == "color('a', '#111')"

    def test_empty_args_pass_through(self):
        root = rewrite('<svg><path id="$fill(a,)"/></svg>')
        assert root.find("path").get("[attr.fill]") == "color('a', '')"

    def test_root_with_instruction_rewritten(self):
        root = rewrite('<svg id="$fill(bg)" fill="none"><path/></svg>')
        assert root.get("[attr.fill]") == "color('bg', 'none')"
        assert "id" not in root.attrib


# ─── 不符合格式的節點 ─────────────────────────────────────────────────────────

class TestUntouchedNodes:
    @pytest.mark.parametrize("identifier", ["star", "$stroke(a)", "$fill()", "Vector 1"])
    def test_non_matching_id_left_unchanged(self, identifier):
        svg = f'<svg><path id="{identifier}" fill="#fff" d="M1 1"/></svg>'
        before = dict(load_svg(svg).find("path").attrib)
        after = dict(rewrite(svg).find("path").attrib)
        assert after == before

    def test_node_without_id_left_unchanged(self):
        root = rewrite('<svg><path fill="#fff"/></svg>')
        assert root.find("path").attrib == {"fill": "#fff"}


# ─── 根節點尺寸 ──────────────────────────────────────────────────────────────

class TestSizeAttributes:
    def test_width_height_removed(self):
        root = rewrite('<svg width="24" height="16" viewBox="0 0 24 16"/>')
        assert "width" not in root.attrib
        assert "height" not in root.attrib
        assert root.get("viewBox") == "0 0 24 16"

    def test_missing_size_is_fine(self):
        root = rewrite('<svg viewBox="0 0 24 24"/>')
        assert "width" not in root.attrib
        assert "height" not in root.attrib

    def test_child_size_kept(self):
        root = rewrite('<svg width="24"><rect width="10" height="10"/></svg>')
        assert root.find("rect").get("width") == "10"


# ─── 重複執行 ────────────────────────────────────────────────────────────────

def test_second_pass_is_noop():
    root = rewrite('<svg width="1"><path id="$fill(a,b)" fill="#fff"/><path id="keep"/></svg>')
    first = [dict(el.attrib) for el in root.iter()]
    rewrite_template(root)
    second = [dict(el.attrib) for el in root.iter()]
    assert first == second


# ─── 假 DOM 注入 ─────────────────────────────────────────────────────────────

class TestFakeDom:
    def test_rewrite_fake_tree(self):
        path = FakeElement({"id": "$fill(iconColor)", "fill": "#000"})
        other = FakeElement({"id": "plain"})
        root = FakeElement({"width": "24", "height": "24"}, [path, other])

        rewrite_template(root)

        assert root.attrib == {}
        assert path.attrib == {"[attr.fill]": "color('iconColor', '#000')"}
        assert other.attrib == {"id": "plain"}

    def test_custom_parser(self):
        calls = []

        def parse(identifier):
            calls.append(identifier)
            return None

        root = FakeElement({}, [FakeElement({"id": "a"}), FakeElement({"id": "b"})])
        rewrite_template(root, parse=parse)
        assert calls == ["a", "b"]

    def test_render_with_injected_loader(self):
        root = FakeElement({"width": "1"}, [FakeElement({"id": "$fill(x)"})])
        result = render_template("ignored", load=lambda text: root, dump=lambda el: el)
        assert result is root
        assert root.children[0].attrib == {"[attr.fill]": "color('x')"}


# ─── 序列化 ──────────────────────────────────────────────────────────────────

class TestSerialization:
    FIGMA_SVG = (
        '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" '
        'xmlns="http://www.w3.org/2000/svg">\n'
        '<path id="$fill(iconColor)" d="M12 2L15 8" fill="#000"/>\n'
        '</svg>\n'
    )

    def test_default_namespace_kept(self):
        result = render_template(self.FIGMA_SVG)
        assert 'xmlns="http://www.w3.org/2000/svg"' in result
        assert "ns0:" not in result

    def test_binding_in_output(self):
        result = render_template(self.FIGMA_SVG)
        assert "[attr.fill]=\"color('iconColor', '#000')\"" in result
        assert 'width="24"' not in result

    def test_namespaced_tree_rewritten(self):
        root = rewrite(self.FIGMA_SVG)
        path = root.find("svg:path", SVG_NS)
        assert path.get("[attr.fill]") == "color('iconColor', '#000')"
        assert path.get("d") == "M12 2L15 8"
        assert root.get("fill") == "none"

    def test_dump_round_trip_attributes(self):
        root = load_svg('<svg viewBox="0 0 1 1"><path d="M0 0"/></svg>')
        assert load_svg(dump_svg(root)).find("path").get("d") == "M0 0"

    def test_invalid_markup_raises(self):
        with pytest.raises(ET.ParseError):
            load_svg("<svg><path></svg>")
