"""Tests for the main.py command-line interface."""
import json

import pytest

import main
from pagetoc.core.config import Config

DOCUMENT = "<h1>Intro</h1><h2>Setup</h2><h1>Intro</h1>"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "OVERRIDE_STORE", "json")
    monkeypatch.setattr(Config, "DOCUMENT_SOURCE", "directory")
    monkeypatch.setattr(Config, "EDIT_ENABLED", True)
    monkeypatch.setattr(Config, "EDITABLE_DOCUMENTS", [])
    monkeypatch.setattr(Config, "PAGE_URL_PREFIX", "")

    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "1.html").write_text(DOCUMENT, encoding="utf-8")

    return [
        "--path",
        str(docs),
        "--store",
        "json",
        "--overrides-path",
        str(tmp_path / "overrides.json"),
    ]


class TestParser:
    def test_save_arguments(self) -> None:
        args = main.create_parser().parse_args(
            ["save", "12", "--hide", "a::1", "--hide", "b::1", "--label", "c::1=C"]
        )
        assert args.command == "save"
        assert args.document_id == "12"
        assert args.hide == ["a::1", "b::1"]
        assert args.label == ["c::1=C"]

    def test_global_options(self) -> None:
        args = main.create_parser().parse_args(
            ["--source", "epub", "--path", "book.epub", "list"]
        )
        assert args.source == "epub"
        assert args.path == "book.epub"
        assert args.command == "list"

    def test_no_command(self) -> None:
        assert main.main([]) == 1


class TestParseLabels:
    def test_pairs(self) -> None:
        assert main.parse_labels(["a::1=Hello = World", "b::1="]) == {
            "a::1": "Hello = World",
            "b::1": "",
        }

    def test_invalid_pair(self) -> None:
        with pytest.raises(ValueError):
            main.parse_labels(["missing-separator"])


class TestCommands:
    def test_save_then_toc_json(self, workspace, capsys) -> None:
        assert (
            main.main(
                workspace
                + ["save", "1", "--hide", "intro::2", "--label", "setup::1=Setup Guide"]
            )
            == 0
        )
        capsys.readouterr()

        assert main.main(workspace + ["toc", "1", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data["documentId"] == "1"
        assert data["canEdit"] is True
        assert data["pageUrl"] == "1.html"
        assert [(i["key"], i["hidden"], i["label"]) for i in data["items"]] == [
            ("intro::1", False, "Intro"),
            ("setup::1", False, "Setup Guide"),
            ("intro::2", True, "Intro"),
        ]

    def test_toc_text(self, workspace, capsys) -> None:
        assert main.main(workspace + ["toc", "1", "--show-keys"]) == 0
        out = capsys.readouterr().out
        assert "- Intro" in out
        assert "<setup::1 #Setup>" in out

    def test_save_denied(self, workspace, monkeypatch, capsys) -> None:
        monkeypatch.setattr(Config, "EDIT_ENABLED", False)
        assert main.main(workspace + ["save", "1", "--hide", "intro::1"]) == 1
        assert "No permission to edit." in capsys.readouterr().out

    def test_list(self, workspace, capsys) -> None:
        assert main.main(workspace + ["list"]) == 0
        out = capsys.readouterr().out
        assert "제목 3개" in out
