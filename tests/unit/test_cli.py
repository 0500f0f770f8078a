"""Unit tests for jastx.cli.main — the render, validate, kinds and version
commands, driven through click's CliRunner.
"""
from __future__ import annotations

import json
import re
from pathlib import Path

import yaml
from click.testing import CliRunner

from jastx.cli.main import cli
from jastx.taxonomy.kinds import Family, Kind, kinds_in

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_runner() -> CliRunner:
    return CliRunner()


def _ident(name: str) -> dict[str, object]:
    return {"kind": "ident", "props": {"name": name}}


def _declaration_list(kind: str, *declarations: dict[str, object]) -> dict[str, object]:
    return {
        "kind": "var:declaration-list",
        "props": {"declaration_kind": kind},
        "children": list(declarations),
    }


_HELLO = _declaration_list(
    "const",
    {
        "kind": "var:declaration",
        "children": [
            _ident("x"),
            {"kind": "t:primitive", "props": {"name": "string"}},
            {"kind": "l:string", "props": {"value": "Hello"}},
        ],
    },
)

# const without an initializer: constructible, but warns (JSX101).
_UNINITIALIZED = _declaration_list("const", {"kind": "var:declaration", "children": [_ident("x")]})

# A string literal cannot be a declaration target.
_INVALID = _declaration_list(
    "let",
    {"kind": "var:declaration", "children": [{"kind": "l:string", "props": {"value": "x"}}]},
)


def _write_json(directory: Path, data: object, name: str = "tree.json") -> str:
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _write_yaml(directory: Path, data: object, name: str = "tree.yaml") -> str:
    path = directory / name
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return str(path)


# ===========================================================================
# render
# ===========================================================================


class TestRenderCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_renders_json(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", _write_json(tmp_path, _HELLO)])
        assert result.exit_code == 0
        assert result.output == 'const x:string="Hello"\n'

    def test_renders_yaml(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", _write_yaml(tmp_path, _HELLO)])
        assert result.exit_code == 0
        assert result.output == 'const x:string="Hello"\n'

    def test_explicit_format_overrides_extension(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path, _HELLO, name="tree.txt")
        result = self.runner.invoke(cli, ["render", path, "--format", "yaml"])
        assert result.exit_code == 0
        assert "const x" in result.output

    def test_output_file(self, tmp_path: Path) -> None:
        out = tmp_path / "out.js"
        result = self.runner.invoke(
            cli, ["render", _write_json(tmp_path, _HELLO), "-o", str(out)]
        )
        assert result.exit_code == 0
        assert "Rendered to" in result.output
        assert out.read_text(encoding="utf-8") == 'const x:string="Hello"\n'

    def test_warnings_do_not_block_rendering(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", _write_json(tmp_path, _UNINITIALIZED)])
        assert result.exit_code == 0
        assert result.output == "const x\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = self.runner.invoke(cli, ["render", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("kind: [unclosed", encoding="utf-8")
        result = self.runner.invoke(cli, ["render", str(path)])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_malformed_tree(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", _write_json(tmp_path, {"props": {}})])
        assert result.exit_code == 1
        assert "Malformed tree" in result.output

    def test_invalid_node(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["render", _write_json(tmp_path, _INVALID)])
        assert result.exit_code == 1
        assert "Invalid tree" in result.output
        assert "JSX007" in result.output

    def test_invalid_format_choice(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path, _HELLO)
        result = self.runner.invoke(cli, ["render", path, "--format", "toml"])
        assert result.exit_code != 0


# ===========================================================================
# validate
# ===========================================================================


class TestValidateCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_clean_tree(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["validate", _write_json(tmp_path, _HELLO)])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_warnings_exit_zero(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["validate", _write_json(tmp_path, _UNINITIALIZED)])
        assert result.exit_code == 0
        assert "JSX101" in result.output
        assert "0 error(s), 1 warning(s)" in result.output

    def test_strict_promotes_warnings(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path, _UNINITIALIZED)
        result = self.runner.invoke(cli, ["validate", path, "--strict"])
        assert result.exit_code == 1
        assert "1 error(s), 0 warning(s)" in result.output

    def test_invalid_node_reported(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["validate", _write_yaml(tmp_path, _INVALID)])
        assert result.exit_code == 1
        assert "JSX007" in result.output
        assert "Summary:" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = self.runner.invoke(cli, ["validate", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1


# ===========================================================================
# kinds and version
# ===========================================================================


class TestKindsCommand:
    def setup_method(self) -> None:
        self.runner = _make_runner()

    def test_lists_every_kind(self) -> None:
        result = self.runner.invoke(cli, ["kinds"])
        assert result.exit_code == 0
        assert f"{len(Kind)} kind(s)" in result.output

    def test_family_filter(self) -> None:
        result = self.runner.invoke(cli, ["kinds", "--family", "type"])
        assert result.exit_code == 0
        assert f"{len(kinds_in(Family.TYPE))} kind(s)" in result.output

    def test_unknown_family(self) -> None:
        result = self.runner.invoke(cli, ["kinds", "--family", "statement"])
        assert result.exit_code != 0


class TestVersionCommand:
    def test_shows_version(self, expected_version: str) -> None:
        result = _make_runner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "jastx" in result.output
        assert expected_version in result.output

    def test_help_lists_commands(self) -> None:
        result = _make_runner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("render", "validate", "kinds", "version"):
            assert command in result.output


class TestImportBoundary:
    def test_imports_only_public_subpackages(self) -> None:
        import jastx.cli.main as cli_module

        source = Path(cli_module.__file__).read_text(encoding="utf-8")
        assert re.findall(r"from jastx\.\w+\.\w+ import", source) == []
