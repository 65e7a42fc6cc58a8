import pandas as pd

from bechdel_pipeline.analysis import plots
from bechdel_pipeline.transform.aggregate import (category_genre_matrix, count_by_genre_and_binary,
                                                  median_budget_by_category, sums_by_year_and_binary)
from bechdel_pipeline.transform.genres import expand_genres, genres_to_long
from bechdel_pipeline.transform.recode import recode_clean_test


def _aggregates(df):
    long_df = genres_to_long(expand_genres(df))
    return {
        "median_budget_by_category": median_budget_by_category(df),
        "category_genre_matrix": category_genre_matrix(long_df),
        "count_by_genre_and_binary": count_by_genre_and_binary(long_df),
        "sums_by_year_and_binary": sums_by_year_and_binary(df),
    }


def test_render_all_writes_every_chart(movies_df, tmp_path):
    df = recode_clean_test(movies_df)
    written = plots.render_all(df, _aggregates(df), tmp_path)
    assert len(written) == 10
    assert all(p.exists() and p.suffix == ".png" for p in written)


def test_plot_skips_without_data(tmp_path):
    assert plots.plot_binary_counts(pd.DataFrame({"title": ["x"]}), tmp_path) is None
    assert plots.plot_category_genre_heatmap(pd.DataFrame(), tmp_path) is None
    assert plots.plot_correlation_matrix(pd.DataFrame({"budget_2013": [1.0, 2.0]}), tmp_path) is None


def test_render_all_continues_after_failure(movies_df, tmp_path, monkeypatch):
    df = recode_clean_test(movies_df)

    def broken(*_args):
        raise RuntimeError("kaputt")

    monkeypatch.setattr(plots, "plot_histograms", broken)
    written = plots.render_all(df, _aggregates(df), tmp_path)
    assert len(written) == 9
