"""Unit tests for the static ingredient dictionary."""

import json

import pytest
from resolver.dictionary import BUILTIN_ENTRIES, Dictionary, load_glossary, normalize


class TestNormalize:
    """Test cases for the normalize function."""

    def test_trims_and_lowercases(self):
        assert normalize("  Яблуко\n") == "яблуко"
        assert normalize("Olive Oil ") == "olive oil"

    def test_keeps_inner_whitespace(self):
        assert normalize(" цвітна  капуста ") == "цвітна  капуста"


class TestDictionary:
    """Forward and derived reverse lookups."""

    def test_forward_lookup(self):
        """Lookups are exact after normalization."""
        dictionary = Dictionary([("Яблуко", "apple")])
        assert dictionary.to_target(" ЯБЛУКО ") == "apple"
        assert dictionary.to_target("яблук") is None

    def test_reverse_is_derived(self):
        """Every forward value maps back to its normalized key."""
        dictionary = Dictionary([("Морква", "Carrot")])
        assert dictionary.to_source("carrot") == "морква"
        assert dictionary.reverse == {"carrot": "морква"}

    def test_reverse_collision_first_wins(self):
        """When two source terms share a target term, the first one is kept."""
        dictionary = Dictionary([("олія", "oil"), ("масло", "Oil")])
        assert dictionary.to_source("oil") == "олія"
        assert dictionary.to_target("масло") == "Oil"

    def test_later_forward_entry_overrides(self):
        """Repeated source terms keep the last target term."""
        dictionary = Dictionary([("перець", "pepper"), ("Перець", "bell pepper")])
        assert dictionary.to_target("перець") == "bell pepper"
        assert dictionary.to_source("bell pepper") == "перець"
        assert dictionary.to_source("pepper") is None
        assert len(dictionary) == 1

    def test_mappings_are_read_only(self):
        dictionary = Dictionary([("яблуко", "apple")])
        with pytest.raises(TypeError):
            dictionary.forward["груша"] = "pear"  # type: ignore[index]


class TestBuiltinEntries:
    """Invariants of the shipped vocabulary."""

    def test_keys_are_normalized(self):
        for source_term, _ in BUILTIN_ENTRIES:
            assert source_term == normalize(source_term)

    def test_round_trip_consistency(self):
        """The shipped data has no reverse collisions."""
        dictionary = Dictionary.load()
        assert len(dictionary) == len(BUILTIN_ENTRIES)
        for source_term, target_term in BUILTIN_ENTRIES:
            assert dictionary.to_target(source_term) == target_term
            assert dictionary.to_source(target_term) == source_term

    def test_apple(self):
        assert Dictionary.load().to_target("Яблуко ") == "apple"


class TestGlossary:
    """Loading extra entries from glossary files."""

    def test_yaml_glossary_extends_and_overrides(self, tmp_path):
        path = tmp_path / "glossary.yml"
        path.write_text("кумкват: kumquat\nяблуко: Apple\n", encoding="utf-8")

        dictionary = Dictionary.load(path)
        assert dictionary.to_target("кумкват") == "kumquat"
        assert dictionary.to_target("яблуко") == "Apple"
        assert len(dictionary) == len(BUILTIN_ENTRIES) + 1

    def test_json_glossary(self, tmp_path):
        path = tmp_path / "glossary.json"
        path.write_text(json.dumps({"фейхоа": "feijoa"}, ensure_ascii=False), encoding="utf-8")
        assert load_glossary(path) == {"фейхоа": "feijoa"}

    def test_empty_yaml_glossary(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_glossary(path) == {}

    def test_non_mapping_glossary_raises(self, tmp_path):
        path = tmp_path / "glossary.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(TypeError, match="Glossary must be a mapping"):
            load_glossary(path)

    def test_missing_glossary_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_glossary(tmp_path / "missing.yml")
