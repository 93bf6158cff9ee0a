"""Tests for longest-prefix product classification."""

from __future__ import annotations

import pytest

from analytics.classification import Classifier
from config.settings import Settings
from core.models import PrefixRule
from core.prefix_index import PrefixIndex


@pytest.fixture()
def index(registry, settings) -> PrefixIndex:
    return PrefixIndex(registry=registry, settings=settings)


def test_added_prefix_classifies_matching_names_case_insensitively(index, settings):
    index.add("tomate", "cat-hort")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("TOMATE ITALIANO KG") == "cat-hort"
    assert classifier.classify("tomate cereja") == "cat-hort"


def test_longest_prefix_wins(index, settings):
    index.add("LEI", "cat-hort")
    index.add("LEITE", "cat-dairy")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("LEITE DESNATADO") == "cat-dairy"
    assert classifier.classify("LEIGO") == "cat-hort"


def test_longer_rule_wins_regardless_of_insertion_order(index, settings):
    index.add("LEITE COND", "cat-groc")
    index.add("LEI", "cat-dairy")
    classifier = Classifier.from_index(index, settings=settings)

    rule = classifier.match("LEITE CONDENSADO")

    assert rule is not None and rule.prefix == "LEITE COND"
    assert classifier.classify("LEITE CONDENSADO") == "cat-groc"


def test_unmatched_and_empty_names_are_uncategorized(index, settings):
    index.add("ARROZ", "cat-groc")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("FEIJAO CARIOCA") == "uncategorized"
    assert classifier.classify("") == "uncategorized"
    assert classifier.classify(None) == "uncategorized"
    # The prefix must lead the name.
    assert classifier.classify("OLEO DE ARROZ") == "uncategorized"


def test_equal_length_tie_goes_to_first_inserted_rule(index, settings):
    first = index.add("SAB", "cat-clean")
    index.add("SAB", "cat-groc")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.match("SABAO EM PO") == first
    assert classifier.classify("SABAO EM PO") == "cat-clean"


def test_updated_rule_keeps_its_tie_break_position(index, settings):
    first = index.add("AAA", "cat-hort")
    index.add("AAB", "cat-groc")
    index.update(first.id, "AAB", "cat-clean")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("AAB 1KG") == "cat-clean"


def test_dangling_category_reference_is_uncategorized(registry, settings):
    rules = [
        PrefixRule(id="1", prefix="PAO", category_id="cat-groc"),
        PrefixRule(id="2", prefix="PAO DE QUEIJO", category_id="cat-deleted"),
    ]
    classifier = Classifier(rules, registry, settings=settings)

    assert classifier.classify("PAO DE QUEIJO 400G") == "uncategorized"
    assert classifier.classify("PAO FRANCES") == "cat-groc"


def test_classify_is_idempotent(index, settings):
    index.add("LEITE", "cat-dairy")
    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("LEITE UHT") == classifier.classify("LEITE UHT") == "cat-dairy"
    assert classifier("LEITE UHT") == "cat-dairy"


def test_removing_rule_falls_back_to_shorter_match(index, settings):
    index.add("LEI", "cat-hort")
    longer = index.add("LEITE", "cat-dairy")
    index.remove(longer.id)

    classifier = Classifier.from_index(index, settings=settings)
    assert classifier.classify("LEITE DESNATADO") == "cat-hort"

    index.remove(index.list()[0].id)
    classifier = Classifier.from_index(index, settings=settings)
    assert classifier.classify("LEITE DESNATADO") == "uncategorized"


def test_classifier_snapshot_ignores_later_index_changes(index, settings):
    index.add("LEITE", "cat-dairy")
    classifier = Classifier.from_index(index, settings=settings)

    index.add("LEITE UHT", "cat-groc")

    assert classifier.classify("LEITE UHT INTEGRAL") == "cat-dairy"


def test_uncategorized_id_comes_from_settings(index):
    classifier = Classifier.from_index(index, settings=Settings(uncategorized_id="OUTROS"))

    assert classifier.classify("QUALQUER COISA") == "OUTROS"


def test_end_to_end_longer_match_beats_dairy_rule(index, settings):
    index.add("LEI", "cat-dairy")
    index.add("LEITE COND", "cat-groc")

    classifier = Classifier.from_index(index, settings=settings)

    assert classifier.classify("LEITE CONDENSADO") == "cat-groc"


def test_classifier_keeps_category_ids_seen_at_construction(index, registry, categories, settings):
    index.add("SABAO", "cat-clean")
    classifier = Classifier.from_index(index, settings=settings)

    registry.refresh([category for category in categories if category.id != "cat-clean"])

    assert classifier.classify("SABAO EM PO") == "cat-clean"
    assert Classifier.from_index(index, settings=settings).classify("SABAO EM PO") == "uncategorized"
