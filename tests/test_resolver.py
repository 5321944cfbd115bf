"""Tests for the path resolver."""

from pathlib import Path

from mini2react.analysis.resolver import candidate_paths, normalize_path, resolve_specifier


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_normalize_pops_parent_segments():
    assert normalize_path(Path("/a/b/../c/./d")) == Path("/a/c/d")


def test_normalize_past_root_is_noop():
    assert normalize_path(Path("/../../x")) == Path("/x")


def test_normalize_relative_joins_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert normalize_path(Path("sub/../f.ts")) == Path.cwd() / "f.ts"


def test_package_specifier_is_ignored(tmp_path):
    main = _write(tmp_path / "main.ts")
    _write(tmp_path / "react.ts")
    assert resolve_specifier(main, "react") is None


def test_missing_target_returns_none(tmp_path):
    main = _write(tmp_path / "main.ts")
    assert resolve_specifier(main, "./ghost") is None


def test_extension_candidate_beats_index(tmp_path):
    root = tmp_path.resolve()
    main = _write(root / "main.ts")
    a = _write(root / "a.ts")
    _write(root / "a" / "index.ts")
    assert resolve_specifier(main, "./a") == a


def test_index_candidate_used_for_directories(tmp_path):
    root = tmp_path.resolve()
    main = _write(root / "main.ts")
    index = _write(root / "widgets" / "index.tsx")
    assert resolve_specifier(main, "./widgets") == index


def test_exact_path_wins(tmp_path):
    root = tmp_path.resolve()
    main = _write(root / "main.ts")
    data = _write(root / "data.json")
    assert resolve_specifier(main, "./data.json") == data


def test_same_file_through_different_specifiers(tmp_path):
    root = tmp_path.resolve()
    target = _write(root / "lib" / "util.ts")
    main = _write(root / "app" / "main.ts")
    first = resolve_specifier(main, "../lib/util")
    second = resolve_specifier(main, "./../app/../lib/./util.ts")
    assert first == second == target


def test_resolution_is_idempotent(tmp_path):
    root = tmp_path.resolve()
    main = _write(root / "main.ts")
    _write(root / "b.tsx")
    assert resolve_specifier(main, "./b") == resolve_specifier(main, "./b")


def test_candidate_order():
    base = Path("/p/a")
    assert candidate_paths(base, (".ts", ".tsx")) == [
        Path("/p/a"),
        Path("/p/a.ts"),
        Path("/p/a.tsx"),
        Path("/p/a/index.ts"),
        Path("/p/a/index.tsx"),
    ]


def test_nul_byte_specifier_is_unresolved(tmp_path):
    main = _write(tmp_path / "main.ts")
    assert resolve_specifier(main, "./b\x00") is None
