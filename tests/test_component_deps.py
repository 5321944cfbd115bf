"""Tests for the component dependency collector."""

import json
from pathlib import Path

from mini2react.analysis import ComponentDependencyCollector, TraversalContext, collect_all_dependencies
from mini2react.models import DependencyEdge, DependencyKind, Dialect

FIXTURES = Path(__file__).parent / "fixtures"
COMPONENTS = (FIXTURES / "miniapp" / "components").resolve()
BUTTON = COMPONENTS / "my-button"
ICON = COMPONENTS / "icon"


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def _component(root: Path, name: str, using: dict | None = None) -> Path:
    return _write(root / name / "index.json", json.dumps({"usingComponents": using or {}}))


def _targets(edges):
    return [e.target for e in edges]


class TestFixtureComponent:
    def test_button_edges(self):
        edges = collect_all_dependencies(BUTTON / "index.json")
        by_target = {e.target: e.kind for e in edges}

        assert by_target[ICON / "index.json"] == DependencyKind.COMPONENT
        assert by_target[ICON / "index.axml"] == DependencyKind.COMPONENT
        assert by_target[ICON / "icon.png"] == DependencyKind.ASSET
        assert by_target[BUTTON / "index.axml"] == DependencyKind.COMPONENT
        assert by_target[BUTTON / "format.sjs"] == DependencyKind.SCRIPT
        assert by_target[BUTTON / "index.acss"] == DependencyKind.STYLE
        assert by_target[BUTTON / "base.less"] == DependencyKind.STYLE
        assert by_target[BUTTON / "bg.png"] == DependencyKind.ASSET
        assert by_target[BUTTON / "index.js"] == DependencyKind.SCRIPT
        assert by_target[BUTTON / "utils.js"] == DependencyKind.SCRIPT
        assert by_target[COMPONENTS.parent / "lib" / "theme.js"] == DependencyKind.SCRIPT

    def test_dependency_precedes_dependent(self):
        edges = collect_all_dependencies(BUTTON / "index.json")
        order = _targets(edges)
        assert order.index(ICON / "icon.png") < order.index(ICON / "index.axml")
        assert order.index(ICON / "index.axml") < order.index(ICON / "index.json")
        assert order.index(BUTTON / "utils.js") < order.index(BUTTON / "index.js")
        assert order.index(BUTTON / "base.less") < order.index(BUTTON / "index.acss")

    def test_edge_source_is_discovering_file(self):
        edges = collect_all_dependencies(BUTTON / "index.json")
        sjs = next(e for e in edges if e.target == BUTTON / "format.sjs")
        assert sjs.source == BUTTON / "index.axml"

    def test_unresolvable_components_are_dropped(self):
        card = COMPONENTS / "card"
        edges = collect_all_dependencies(card / "index.json")
        direct = [e.target for e in edges if e.source == card / "index.json"]
        assert BUTTON / "index.json" in direct
        assert all("does-not-exist" not in str(t) for t in _targets(edges))


class TestCycles:
    def test_mutual_components_terminate_without_duplicates(self, tmp_path):
        root = tmp_path.resolve()
        a = _component(root, "a", {"b": "../b"})
        b = _component(root, "b", {"a": "../a"})

        edges = collect_all_dependencies(a)
        assert edges == [
            DependencyEdge(b, a, DependencyKind.COMPONENT),
            DependencyEdge(a, b, DependencyKind.COMPONENT),
        ]
        assert _targets(edges).count(a) == 1

    def test_shared_dependency_visited_once_edge_per_source(self, tmp_path):
        root = tmp_path.resolve()
        shared = _component(root, "shared")
        _write(root / "shared" / "index.axml", "<view />")
        a = _component(root, "a", {"s": "../shared", "b": "../b"})
        b = _component(root, "b", {"s": "../shared"})

        edges = collect_all_dependencies(a)
        shared_edges = [e for e in edges if e.target == shared]
        assert {e.source for e in shared_edges} == {a, b}
        # shared's own subtree is expanded once
        axml = [e for e in edges if e.target == root / "shared" / "index.axml"]
        assert len(axml) == 1

    def test_shared_visited_set_across_calls(self, tmp_path):
        root = tmp_path.resolve()
        _component(root, "leaf")
        a = _component(root, "a", {"leaf": "../leaf"})
        b = _component(root, "b", {"leaf": "../leaf"})

        visited: set[Path] = set()
        out: list[DependencyEdge] = []
        collect_all_dependencies(a, visited, out)
        collect_all_dependencies(b, visited, out)
        assert [e.source for e in out] == [a, b]


class TestHandlers:
    def test_malformed_config_yields_no_components(self, tmp_path):
        root = tmp_path.resolve()
        config = _write(root / "c" / "index.json", "{ not json")
        assert collect_all_dependencies(config) == []

    def test_deeply_nested_config_yields_no_components(self, tmp_path):
        root = tmp_path.resolve()
        config = _write(root / "c" / "index.json", "[" * 100000 + "]" * 100000)
        assert collect_all_dependencies(config) == []

    def test_nul_byte_component_path_is_dropped(self, tmp_path):
        root = tmp_path.resolve()
        icon = _component(root, "icon")
        config = _component(root, "page", {"bad": "../b\u0000", "icon": "../icon"})
        edges = collect_all_dependencies(config)
        assert edges == [DependencyEdge(config, icon, DependencyKind.COMPONENT)]

    def test_script_file_extensions_come_from_dialect(self, tmp_path):
        root = tmp_path.resolve()
        script = _write(root / "index.mjs", "const u = require('./util');\n")
        util = _write(root / "util.js")
        assert collect_all_dependencies(script) == []

        dialect = Dialect(script_file_extensions=(".mjs",))
        assert collect_all_dependencies(script, dialect=dialect) == [
            DependencyEdge(script, util, DependencyKind.SCRIPT),
        ]

    def test_style_import_requires_existing_less(self, tmp_path):
        root = tmp_path.resolve()
        style = _write(root / "index.acss", '@import "./base";\n@import "./gone";\n')
        base = _write(root / "base.less")
        edges = collect_all_dependencies(style)
        assert edges == [DependencyEdge(style, base, DependencyKind.STYLE)]

    def test_style_import_missing_less_is_omitted(self, tmp_path):
        root = tmp_path.resolve()
        style = _write(root / "index.acss", '@import "./base";\n')
        _write(root / "base.css")
        assert collect_all_dependencies(style) == []

    def test_script_probe_order(self, tmp_path):
        root = tmp_path.resolve()
        script = _write(root / "index.js", "const u = require('./util');\nimport x from 'pkg';\n")
        js = _write(root / "util.js")
        _write(root / "util.ts")
        assert _targets(collect_all_dependencies(script)) == [js]

    def test_script_json_fallback(self, tmp_path):
        root = tmp_path.resolve()
        script = _write(root / "index.ts", "import data from './data';\n")
        data = _write(root / "data.json", "{}")
        edges = collect_all_dependencies(script)
        assert edges == [DependencyEdge(script, data, DependencyKind.SCRIPT)]

    def test_markup_sjs_and_assets(self, tmp_path):
        root = tmp_path.resolve()
        markup = _write(
            root / "index.axml",
            '<import-sjs name="m" from="./m.sjs" />\n'
            '<image src="./a.png" /><image src="{{dynamic}}" /><image src="https://x/y.png" />',
        )
        sjs = _write(root / "m.sjs")
        png = _write(root / "a.png")
        edges = collect_all_dependencies(markup)
        assert edges == [
            DependencyEdge(markup, sjs, DependencyKind.SCRIPT),
            DependencyEdge(markup, png, DependencyKind.ASSET),
        ]

    def test_unknown_extension_has_no_edges(self, tmp_path):
        readme = _write(tmp_path / "README.md", "import x from './x';")
        assert collect_all_dependencies(readme) == []

    def test_absolute_component_path_uses_project_root(self, tmp_path):
        root = tmp_path.resolve()
        icon = _component(root / "components", "icon")
        page = _component(root / "pages", "home", {"icon": "/components/icon"})

        collector = ComponentDependencyCollector(project_root=root)
        edges = collector.collect(page)
        assert DependencyEdge(page, icon, DependencyKind.COMPONENT) in edges

        assert ComponentDependencyCollector().collect(page, TraversalContext()) == []

    def test_strict_mode_warns(self, tmp_path, caplog):
        root = tmp_path.resolve()
        config = _component(root, "a", {"x": "../missing"})
        with caplog.at_level("WARNING"):
            ComponentDependencyCollector(strict=True).collect(config)
        assert "missing" in caplog.text
