import pandas as pd
import pytest

from bechdel_pipeline.utils.basic_validator import validate_dataframe, validate_or_raise


def test_valid_frame_passes(movies_df):
    ok, errors = validate_dataframe(movies_df, df_name="Movies")
    assert ok, errors


def test_reports_bad_binary_and_unknown_code(movies_df, tmp_path):
    df = movies_df.copy()
    df.loc[0, "binary"] = "MAYBE"
    df.loc[1, "clean_test"] = "weird"
    report = tmp_path / "report.txt"
    invalid = tmp_path / "invalid.csv"

    ok, errors = validate_dataframe(df, df_name="Movies", error_report_path=str(report),
                                    save_invalid_rows=True, invalid_rows_output_path=str(invalid))

    assert not ok
    assert any("'binary'" in e for e in errors)
    assert any("'clean_test'" in e for e in errors)
    assert report.exists()
    assert len(pd.read_csv(invalid)) == 1


def test_reports_missing_columns_and_duplicates(movies_df):
    df = pd.concat([movies_df, movies_df.head(1)], ignore_index=True).drop(columns=["binary"])
    ok, errors = validate_dataframe(df)
    assert not ok
    assert any("fehlende Spalten: binary" in e for e in errors)
    assert any("doppelter imdb-ID" in e for e in errors)


def test_year_out_of_range(movies_df):
    df = movies_df.copy()
    df.loc[2, "year"] = 1700
    ok, errors = validate_dataframe(df)
    assert not ok
    assert any("ungültigem Jahr" in e for e in errors)


def test_empty_frame():
    ok, _ = validate_dataframe(pd.DataFrame(columns=["title", "year", "binary", "clean_test"]))
    assert not ok
    ok, _ = validate_dataframe(pd.DataFrame(columns=["title", "year", "binary", "clean_test"]),
                               allow_empty=True)
    assert ok


def test_validate_or_raise(movies_df):
    validate_or_raise(movies_df)
    with pytest.raises(ValueError):
        validate_or_raise(movies_df.drop(columns=["title"]))
