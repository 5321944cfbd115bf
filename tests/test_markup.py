"""Tests for markup parsing and JSX rendering."""

from mini2react.converter import Element, Text, parse_markup, render_nodes
from mini2react.converter.markup_converter import convert_attr, convert_style, event_prop_name
from mini2react.models import Dialect


class TestParser:
    def test_tree_shape(self):
        nodes = parse_markup('<view class="a"><text> Hi </text></view>')
        assert nodes == (
            Element("view", (("class", "a"),), (Element("text", (), (Text("Hi"),)),)),
        )

    def test_whitespace_text_dropped(self):
        (view,) = parse_markup("<view>\n   \n</view>")
        assert view.children == ()

    def test_unclosed_and_stray_tags_tolerated(self):
        nodes = parse_markup("<view><text>a</view></button>")
        assert nodes == (Element("view", (), (Element("text", (), (Text("a"),)),)),)

    def test_self_closing_and_void(self):
        nodes = parse_markup('<import-sjs name="m" from="./m.sjs"><view/><input value="1">')
        assert [n.tag for n in nodes] == ["import-sjs", "view", "input"]

    def test_unclosed_image_is_void(self):
        (view,) = parse_markup('<view><image src="a.png"><text>x</text></view>')
        assert [child.tag for child in view.children] == ["image", "text"]
        assert view.children[0].children == ()

    def test_iter_and_get(self):
        (root,) = parse_markup('<view><image src="a.png"/><view><image src="b.png"/></view></view>')
        sources = [e.get("src") for e in root.iter() if e.tag == "image"]
        assert sources == ["a.png", "b.png"]


class TestAttributes:
    def test_style_object(self):
        assert convert_style("color:red;") == '{{ color: "red" }}'
        assert convert_style("font-size: 12px; ;bad; margin:") == '{{ fontsize: "12px" }}'
        assert convert_style("") == "{{}}"

    def test_style_keys_hyphens_stripped(self):
        style = convert_style("font-size:12px;background-color:red")
        assert style == '{{ fontsize: "12px", backgroundcolor: "red" }}'

    def test_style_keys_camelized_when_enabled(self):
        assert convert_style("font-size:12px", camelize=True) == '{{ fontSize: "12px" }}'
        dialect = Dialect(camelize_style_keys=True)
        assert convert_attr("style", "background-color:red", dialect) == (
            'style={{ backgroundColor: "red" }}', None,
        )

    def test_event_names(self):
        assert event_prop_name("tap") == "onClick"
        assert event_prop_name("touchstart") == "onTouchStart"
        assert event_prop_name("change") == "onChange"

    def test_event_attr_records_handler(self):
        dialect = Dialect()
        assert convert_attr("ontap", "doThing", dialect) == ("onClick={doThing}", "doThing")
        assert convert_attr("catchtap", "{{ stop }}", dialect) == ("onClick={stop}", "stop")

    def test_plain_and_bound_attrs(self):
        dialect = Dialect()
        assert convert_attr("class", "a b", dialect) == ('className="a b"', None)
        assert convert_attr("title", "{{ name }}", dialect) == ("title={name}", None)
        assert convert_attr("alt", 'say "hi"', dialect) == ('alt="say &quot;hi&quot;"', None)
        assert convert_attr("disabled", None, dialect) == ("disabled", None)


class TestRender:
    def test_tag_and_attribute_mapping(self):
        nodes = parse_markup('<view class="a" style="color:red;"><text>Hi</text></view>')
        result = render_nodes(nodes)
        assert result.text == (
            '<div className="a" style={{ color: "red" }}>\n'
            "  <span>\n"
            "    Hi\n"
            "  </span>\n"
            "</div>\n"
        )
        assert result.events == ()

    def test_empty_element_self_closes(self):
        result = render_nodes(parse_markup("<view>  </view>"), indent=4)
        assert result.text == "    <div />\n"

    def test_sjs_dropped_and_events_ordered(self):
        nodes = parse_markup(
            '<import-sjs name="m" from="./m.sjs"/>'
            '<view onTap="b"><view onLongTap="a"/><view onTap="b"/></view>'
        )
        result = render_nodes(nodes)
        assert "import-sjs" not in result.text
        assert result.events == ("b", "a")
        assert "onLongTap={a}" in result.text

    def test_mustache_text(self):
        result = render_nodes(parse_markup("<text>Count: {{ count }}</text>"))
        assert "Count: {count}" in result.text

    def test_unmapped_tag_passes_through(self):
        result = render_nodes(parse_markup('<swiper autoplay="true"></swiper>'))
        assert result.text == '<swiper autoplay="true" />\n'

    def test_unclosed_image_renders_self_closing(self):
        result = render_nodes(parse_markup('<view><image src="a.png"><text>x</text></view>'))
        assert result.text == (
            "<div>\n"
            '  <img src="a.png" />\n'
            "  <span>\n"
            "    x\n"
            "  </span>\n"
            "</div>\n"
        )
