from wardrobo.utils.catalog import (
    ALL_CATEGORIES,
    CATEGORY_TOP,
    ClothingCategory,
    is_valid_category,
    normalize_category,
)


def test_enum_matches_constants():
    assert {c.value for c in ClothingCategory} == set(ALL_CATEGORIES)


def test_is_valid_category_is_case_sensitive():
    assert is_valid_category("DRESS")
    assert not is_valid_category("dress")


def test_normalize_category():
    assert normalize_category(" top ") == CATEGORY_TOP
    assert normalize_category("Outerwear") == "OUTERWEAR"
    assert normalize_category("hats") is None
    assert normalize_category("") is None
    assert normalize_category(None) is None
