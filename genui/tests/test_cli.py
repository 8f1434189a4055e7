"""
genui CLI

Covers:
  - tree: JSON output, --normalize, --repair
  - grade: human and --json output, exit codes, --custom-type
  - jsx: --name, --raw
  - stdin input and unreadable files
"""

import io
import json

import pytest

from genui import __version__
from genui.cli import main
from genui.tests.streams import CARD_JSONL


@pytest.fixture
def card_file(tmp_path):
    path = tmp_path / "card.jsonl"
    path.write_text(CARD_JSONL, encoding="utf-8")
    return str(path)


@pytest.fixture
def widget_file(tmp_path):
    lines = [
        {"op": "add", "path": "/root", "value": "w"},
        {"op": "add", "path": "/elements/w", "value": {"key": "w", "type": "Widget", "props": {}}},
    ]
    path = tmp_path / "widget.jsonl"
    path.write_text("\n".join(json.dumps(line) for line in lines), encoding="utf-8")
    return str(path)


class TestTree:
    def test_prints_tree(self, card_file, capsys):
        assert main(["tree", card_file]) == 0
        tree = json.loads(capsys.readouterr().out)
        assert tree["root"] == "card"
        assert set(tree["elements"]) == {"card", "stack", "title", "count-display"}

    def test_repair(self, tmp_path, capsys):
        path = tmp_path / "bad.jsonl"
        path.write_text(
            '{"op":"add","path":"/root","value":"s"}\n'
            '{"op":"add","path":"/elements/s","value":{"key":"s","type":"Stack","props":{"gap":"medium"}}}\n',
            encoding="utf-8",
        )
        assert main(["tree", str(path), "--repair"]) == 0
        assert json.loads(capsys.readouterr().out)["elements"]["s"]["props"] == {"gap": "base"}

    def test_normalize(self, tmp_path, capsys):
        path = tmp_path / "select.jsonl"
        path.write_text(
            '{"op":"add","path":"/root","value":"s"}\n'
            '{"op":"add","path":"/elements/s","value":{"key":"s","type":"Select","props":{"label":"Plan"}}}\n',
            encoding="utf-8",
        )
        main(["tree", str(path), "--normalize"])
        assert json.loads(capsys.readouterr().out)["elements"]["s"]["type"] == "Input"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(CARD_JSONL))
        assert main(["tree", "-"]) == 0
        assert json.loads(capsys.readouterr().out)["root"] == "card"


class TestGrade:
    def test_pass(self, card_file, capsys):
        assert main(["grade", card_file]) == 0
        out = capsys.readouterr().out
        assert "Structural: PASS" in out
        assert "Composition: PASS" in out

    def test_fail(self, widget_file, capsys):
        assert main(["grade", widget_file]) == 1
        out = capsys.readouterr().out
        assert "Structural: FAIL" in out
        assert 'w: unknown type "Widget"' in out

    def test_custom_type(self, widget_file, capsys):
        main(["grade", widget_file, "--custom-type", "Widget", "--json"])
        report = json.loads(capsys.readouterr().out)
        assert report["structural"]["allPass"] is True

    def test_json(self, card_file, capsys):
        main(["grade", card_file, "--json"])
        report = json.loads(capsys.readouterr().out)
        assert report["structural"]["results"][0]["rule"] == "valid-component-types"
        assert report["composition"]["allPass"] is True


class TestJsx:
    def test_name(self, card_file, capsys):
        assert main(["jsx", card_file, "--name", "Counter"]) == 0
        assert "export function Counter() {" in capsys.readouterr().out

    def test_raw(self, tmp_path, capsys):
        path = tmp_path / "select.jsonl"
        path.write_text(
            '{"op":"add","path":"/root","value":"s"}\n'
            '{"op":"add","path":"/elements/s","value":{"key":"s","type":"Select","props":{"label":"Plan"}}}\n',
            encoding="utf-8",
        )
        main(["jsx", str(path), "--raw"])
        assert '<Select label="Plan" />' in capsys.readouterr().out


class TestErrors:
    def test_missing_file(self, tmp_path, capsys):
        assert main(["tree", str(tmp_path / "nope.jsonl")]) == 2
        assert "ERROR: cannot read" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out
