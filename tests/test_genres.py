import pandas as pd

from bechdel_pipeline.transform.genres import (GENRE_TOKENS, expand_genres, genre_flag_column,
                                               genres_to_long, unmatched_genre_records)


def test_flag_column_names():
    assert genre_flag_column("Comedy") == "comedy"
    assert genre_flag_column("Sci-Fi") == "sci_fi"
    assert len(GENRE_TOKENS) == 17


def test_missing_genre_rows_are_dropped(movies_df):
    wide = expand_genres(movies_df)
    assert len(wide) == len(movies_df) - 1
    assert "tt5" not in set(wide["imdb"])


def test_comedy_substring_sets_flag():
    df = pd.DataFrame({"genre": ["Comedy", "Romance, Comedy", "Drama", "Dark Comedy"]})
    wide = expand_genres(df)
    assert wide["comedy"].tolist() == [True, True, False, True]
    assert wide["romance"].tolist() == [False, True, False, False]


def test_genres_are_not_exclusive(movies_df):
    wide = expand_genres(movies_df)
    row = wide[wide["imdb"] == "tt2"].iloc[0]
    assert row["drama"] and row["sci_fi"]
    assert not row["comedy"]


def test_unmatched_genre_contributes_no_rows():
    wide = expand_genres(pd.DataFrame({"imdb": ["x"], "binary": ["PASS"], "genre": ["Foobar"]}))
    long_df = genres_to_long(wide)
    assert long_df.empty
    assert len(unmatched_genre_records(wide)) == 1


def test_long_layout_one_row_per_present_genre(movies_df):
    long_df = genres_to_long(expand_genres(movies_df))
    assert len(long_df) == 10
    assert set(long_df.loc[long_df["imdb"] == "tt1", "genre"]) == {"Comedy", "Crime"}
    assert "tt7" not in set(long_df["imdb"])


def test_custom_token_list():
    wide = expand_genres(pd.DataFrame({"genre": ["Action, Comedy"]}), tokens=["Comedy"])
    assert "comedy" in wide.columns
    assert "action" not in wide.columns
    assert genres_to_long(wide, tokens=["Comedy"])["genre"].tolist() == ["Comedy"]
