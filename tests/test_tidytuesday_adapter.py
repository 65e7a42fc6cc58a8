import pandas as pd
import pytest

from bechdel_pipeline.adapters.tidytuesday_adapter import TidyTuesdayAdapter


def _write_raw(path, movies_df):
    raw = movies_df.copy()
    raw.loc[len(raw)] = raw.loc[0]  # doppelte imdb-ID
    raw.loc[len(raw)] = [None, "tt99", "", "ok", "PASS", 1.0, "1", "1", "Drama", 5.0, 50, "90 min"]
    raw["binary"] = raw["binary"].str.lower()
    raw.to_csv(path, index=False)


def test_source_url_from_publication_key():
    adapter = TidyTuesdayAdapter({"publication_key": "2021-03-09"})
    assert adapter.source_url == (
        "https://raw.githubusercontent.com/rfordatascience/tidytuesday/master/data/2021/2021-03-09/movies.csv")


def test_extract_reads_local_file(tmp_path, movies_df):
    csv_path = tmp_path / "movies.csv"
    movies_df.to_csv(csv_path, index=False)
    df = TidyTuesdayAdapter({"file_path": csv_path}).extract()
    assert len(df) == len(movies_df)
    # Gross bleibt Text
    assert df["domgross_2013"].iloc[0] == "500"


def test_extract_failure_propagates(tmp_path):
    adapter = TidyTuesdayAdapter({"base_url": str(tmp_path / "missing") + "/", "file_name": "movies.csv"})
    with pytest.raises(FileNotFoundError):
        adapter.extract()


def test_transform_cleans_and_removes_bad_rows(tmp_path, movies_df):
    csv_path = tmp_path / "movies.csv"
    _write_raw(csv_path, movies_df)
    aux_dirs = {"invalid": tmp_path / "invalid", "duplicates": tmp_path / "duplicates"}
    adapter = TidyTuesdayAdapter({"file_path": csv_path, "aux_output_dirs": aux_dirs})

    df = adapter.transform(adapter.extract())

    assert len(df) == len(movies_df)
    assert df["title"].iloc[0] == "Ocean's Twelve"
    assert set(df["binary"]) == {"PASS", "FAIL"}
    assert str(df["year"].dtype) == "Int64"
    assert (tmp_path / "invalid" / "TidyTuesdayAdapter_invalid.csv").exists()
    assert len(pd.read_csv(tmp_path / "duplicates" / "TidyTuesdayAdapter_duplicates.csv")) == 1


def test_transform_requires_title_and_year():
    adapter = TidyTuesdayAdapter({})
    with pytest.raises(KeyError):
        adapter.transform(pd.DataFrame({"title": ["x"]}))


def test_extract_keeps_data_when_copy_cannot_be_written(tmp_path, movies_df):
    source_dir = tmp_path / "source"
    source_dir.mkdir()
    movies_df.to_csv(source_dir / "movies.csv", index=False)
    blocker = tmp_path / "blocker"
    blocker.write_text("keine Verzeichnis", encoding="utf-8")

    adapter = TidyTuesdayAdapter({"base_url": str(source_dir) + "/",
                                  "cache_path": blocker / "movies.csv"})
    df = adapter.extract()

    assert len(df) == len(movies_df)
    assert blocker.is_file()
