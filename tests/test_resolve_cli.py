"""Tests for the batch resolution CLI in dictionary-only mode."""

import json

import pytest
import resolver.resolve_cli as resolve_cli
from resolver.dictionary import Dictionary
from resolver.engine import TextResolutionEngine
from resolver.resolve_cli import load_names, main

PROVIDER_ENV_VARS = (
    "TRANSLATION_PROVIDER",
    "GOOGLE_TRANSLATE_API_KEY",
    "OPENAI_API_KEY",
    "TRANSLATION_SOURCE_LANGUAGE",
    "TRANSLATION_TARGET_LANGUAGE",
    "TRANSLATION_DICTIONARY_PATH",
)


@pytest.fixture(autouse=True)
def unconfigured(monkeypatch):
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadNames:
    """Reading input files."""

    def test_text_file(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_text("Яблуко\n\n  морква \n", encoding="utf-8")
        assert load_names(path) == ["Яблуко", "морква"]

    def test_json_list(self, tmp_path):
        path = tmp_path / "names.json"
        path.write_text(json.dumps(["apple", "carrot"]), encoding="utf-8")
        assert load_names(path) == ["apple", "carrot"]

    def test_json_must_be_list_of_strings(self, tmp_path):
        path = tmp_path / "names.json"
        path.write_text(json.dumps({"apple": 1}), encoding="utf-8")
        with pytest.raises(TypeError):
            load_names(path)


class TestMain:
    """End-to-end runs without a configured provider."""

    def test_resolves_to_target(self, tmp_path, capsys):
        src = tmp_path / "names.txt"
        dst = tmp_path / "out" / "resolved.json"
        src.write_text("Яблуко\nкумкват\n", encoding="utf-8")

        assert main(["--input", str(src), "--dst", str(dst), "--no-progress"]) == 0
        assert json.loads(dst.read_text(encoding="utf-8")) == {
            "Яблуко": "apple",
            "кумкват": "кумкват",
        }
        assert "[ok] wrote" in capsys.readouterr().out

    def test_resolves_to_source_on_stdout(self, tmp_path, capsys):
        src = tmp_path / "names.json"
        src.write_text(json.dumps(["Carrot"]), encoding="utf-8")

        assert main(["--input", str(src), "--to", "uk", "--no-progress"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"Carrot": "морква"}

    def test_status_only(self, capsys):
        assert main(["--status"]) == 0
        status = json.loads(capsys.readouterr().out)
        assert status["isConfigured"] is False
        assert status["state"] == "unconfigured"
        assert status["staticDictionarySize"] > 0

    def test_requires_input_or_status(self, capsys):
        assert main([]) == 1
        assert "[error]" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path, capsys):
        assert main(["--input", str(tmp_path / "missing.txt")]) == 2
        assert "not found" in capsys.readouterr().out

    def test_explicit_languages(self, tmp_path, capsys):
        """--to and --source-language choose the direction explicitly."""
        src = tmp_path / "names.txt"
        src.write_text("Apple\nkumquat\n", encoding="utf-8")

        args = ["--input", str(src), "--to", "uk", "--source-language", "en", "--no-progress"]
        assert main(args) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"Apple": "яблуко", "kumquat": "kumquat"}

    def test_same_source_and_target_passes_through(self, tmp_path, capsys):
        src = tmp_path / "names.txt"
        src.write_text("Яблуко\n", encoding="utf-8")

        args = ["--input", str(src), "--to", "UK", "--source-language", "uk", "--no-progress"]
        assert main(args) == 0
        assert json.loads(capsys.readouterr().out) == {"Яблуко": "Яблуко"}

    def test_unknown_target_language(self, tmp_path, capsys):
        src = tmp_path / "names.txt"
        src.write_text("Яблуко\n", encoding="utf-8")

        assert main(["--input", str(src), "--to", "de", "--no-progress"]) == 1
        assert "[error] --to must be one of: uk, en" in capsys.readouterr().out

    def test_missing_glossary_reports_error(self, tmp_path, monkeypatch, capsys):
        """A bad dictionary path is reported instead of raising a traceback."""
        monkeypatch.setenv("TRANSLATION_DICTIONARY_PATH", str(tmp_path / "missing.yml"))
        src = tmp_path / "names.txt"
        src.write_text("Яблуко\n", encoding="utf-8")

        assert main(["--input", str(src), "--no-progress"]) == 2
        out = capsys.readouterr().out
        assert "[error]" in out
        assert "Glossary not found" in out

    def test_non_mapping_glossary_reports_error(self, tmp_path, monkeypatch, capsys):
        glossary = tmp_path / "glossary.yml"
        glossary.write_text("- яблуко\n", encoding="utf-8")
        monkeypatch.setenv("TRANSLATION_DICTIONARY_PATH", str(glossary))

        assert main(["--status"]) == 2
        assert "[error] Glossary must be a mapping" in capsys.readouterr().out


class ClosingProvider:
    """Provider that records whether it was closed."""

    def __init__(self):
        self.closed = False

    @property
    def name(self) -> str:
        return "closing"

    def close(self) -> None:
        self.closed = True

    def translate(self, text, source_language, target_language):
        return {"text": text}


class TestEngineTeardown:
    """The CLI releases provider resources on every exit path."""

    @pytest.fixture
    def provider(self, monkeypatch):
        provider = ClosingProvider()
        engine = TextResolutionEngine(provider, Dictionary([("яблуко", "apple")]))
        monkeypatch.setattr(resolve_cli, "create_engine", lambda settings: engine)
        return provider

    def test_closed_after_success(self, provider, tmp_path):
        src = tmp_path / "names.txt"
        src.write_text("Яблуко\n", encoding="utf-8")
        assert main(["--input", str(src), "--no-progress"]) == 0
        assert provider.closed is True

    def test_closed_after_input_error(self, provider, tmp_path):
        assert main(["--input", str(tmp_path / "missing.txt")]) == 2
        assert provider.closed is True
