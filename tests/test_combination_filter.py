import re

from capsulify_api.app.services.combination_service import CombinationService

build_filter = CombinationService.build_filter


def test_no_parameters_matches_everything():
    assert build_filter() == {}
    assert build_filter(tags="", combos="", wardrobe="") == {}


def test_tags_become_any_of_constraint():
    criteria = build_filter(tags="Work, Chic ,")
    assert criteria == {"tags": {"$in": ["Work", "Chic"]}}


def test_combos_is_case_insensitive_substring():
    criteria = build_filter(combos="Casual")
    assert criteria["comboName"]["$options"] == "i"
    pattern = re.compile(criteria["comboName"]["$regex"], re.IGNORECASE)
    assert pattern.search("smart casual friday")
    assert not pattern.search("Black tie")


def test_combos_text_is_matched_literally():
    criteria = build_filter(combos="a.b")
    pattern = re.compile(criteria["comboName"]["$regex"])
    assert pattern.search("look a.b")
    assert not pattern.search("look axb")


def test_wardrobe_ignores_unknown_categories():
    criteria = build_filter(wardrobe="top:white-tee, bogus:xyz")
    assert criteria == {"top": "white-tee"}


def test_wardrobe_categories_are_case_insensitive():
    criteria = build_filter(wardrobe="TOP:white-tee,Shoes : loafers,Layer:blazer")
    assert criteria == {"top": "white-tee", "shoes": "loafers", "layer": "blazer"}


def test_wardrobe_pairs_without_item_are_dropped():
    assert build_filter(wardrobe="top,bag:, :tote") == {}


def test_all_parameters_combine():
    criteria = build_filter(tags="Work", combos="friday", wardrobe="bag:tote,dress:slip")
    assert set(criteria) == {"tags", "comboName", "bag", "dress"}
    assert criteria["bag"] == "tote"
    assert criteria["dress"] == "slip"
