import pandas as pd

from bechdel_pipeline.transform.recode import (CLEAN_TEST_LABELS, CLEAN_TEST_ORDER, clean_test_categorical,
                                               recode_clean_test, recode_label, sort_by_clean_test)


def test_known_codes_map_to_labels():
    assert recode_label("dubious") == "Barely Passed"
    assert recode_label("ok") == "Passed"
    assert recode_label("nowomen") == "Fewer than two women"
    assert recode_label("notalk") == "Women don't talk to each other"
    assert recode_label("men") == "Women only talk about men"


def test_unknown_code_passes_through():
    assert recode_label("something-else") == "something-else"
    assert recode_label(None) is None


def test_recode_does_not_mutate_input():
    df = pd.DataFrame({"clean_test": ["ok", "men"]})
    out = recode_clean_test(df)
    assert df["clean_test"].tolist() == ["ok", "men"]
    assert out["clean_test"].tolist() == ["Passed", "Women only talk about men"]


def test_unknown_code_has_no_rank():
    out = recode_clean_test(pd.DataFrame({"clean_test": ["ok", "weird"]}))
    assert out["clean_test"].tolist() == ["Passed", "weird"]
    assert out["clean_test_rank"].iloc[0] == 1
    assert pd.isna(out["clean_test_rank"].iloc[1])


def test_sort_yields_fixed_order():
    codes = ["men", "ok", "weird", "nowomen", "dubious", "notalk"]
    out = sort_by_clean_test(recode_clean_test(pd.DataFrame({"clean_test": codes})))
    assert out["clean_test"].tolist() == CLEAN_TEST_ORDER + ["weird"]


def test_sort_is_stable_within_category():
    df = pd.DataFrame({"clean_test": ["ok", "dubious", "ok"], "title": ["a", "b", "c"]})
    out = sort_by_clean_test(df)
    assert out["title"].tolist() == ["b", "a", "c"]


def test_categorical_keeps_unknown_values():
    cat = clean_test_categorical(pd.Series(["Passed", "weird", None]))
    assert list(cat.categories) == CLEAN_TEST_ORDER + ["weird"]
    assert cat.ordered
    assert list(cat[:2]) == ["Passed", "weird"]


def test_every_label_is_in_display_order():
    assert set(CLEAN_TEST_LABELS.values()) == set(CLEAN_TEST_ORDER)
