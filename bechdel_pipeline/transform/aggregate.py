# bechdel_pipeline/transform/aggregate.py
import logging

import numpy as np
import pandas as pd

from bechdel_pipeline.transform.recode import CLEAN_TEST_ORDER


def coerce_numeric(series: pd.Series) -> pd.Series:
    """Text -> Zahl; nicht-numerische Einträge ('#N/A', 'N/A', '') werden NaN."""
    return pd.to_numeric(series, errors="coerce")


def _category_order(values: pd.Series) -> list:
    extras = sorted({v for v in values.dropna().unique() if v not in CLEAN_TEST_ORDER}, key=str)
    return [c for c in CLEAN_TEST_ORDER if c in set(values.dropna())] + extras


def median_budget_by_category(df: pd.DataFrame, category_col: str = "clean_test",
                              budget_col: str = "budget_2013") -> pd.DataFrame:
    """
    Median-Budget je Bechdel-Kategorie, in der festen Anzeigereihenfolge.

    Fehlende Budgets werden ignoriert.
    """
    budgets = coerce_numeric(df[budget_col])
    grouped = (
        df.assign(**{budget_col: budgets})
          .dropna(subset=[budget_col])
          .groupby(category_col)[budget_col]
          .median()
    )
    order = _category_order(grouped.index.to_series())
    result = grouped.reindex(order).rename("median_budget").reset_index()
    logging.debug(f"Median-Budget je Kategorie:\n{result}")
    return result


def count_by_genre_and_binary(long_df: pd.DataFrame) -> pd.DataFrame:
    """Anzahl Filme je (Genre, PASS/FAIL)."""
    return (
        long_df.groupby(["genre", "binary"])
               .size()
               .rename("count")
               .reset_index()
               .sort_values(["genre", "binary"])
               .reset_index(drop=True)
    )


def count_by_category_and_genre(long_df: pd.DataFrame,
                                category_col: str = "clean_test") -> pd.DataFrame:
    """Anzahl Filme je (Bechdel-Kategorie, Genre)."""
    counts = (
        long_df.groupby([category_col, "genre"])
               .size()
               .rename("count")
               .reset_index()
    )
    order = _category_order(counts[category_col])
    counts["_rank"] = counts[category_col].map({c: i for i, c in enumerate(order)})
    return (
        counts.sort_values(["_rank", "genre"])
              .drop(columns="_rank")
              .reset_index(drop=True)
    )


def category_genre_matrix(long_df: pd.DataFrame, category_col: str = "clean_test") -> pd.DataFrame:
    # Kategorie x Genre, fehlende Kombinationen = 0 (Basis der Heatmap)
    counts = count_by_category_and_genre(long_df, category_col)
    if counts.empty:
        return pd.DataFrame()
    matrix = counts.pivot(index=category_col, columns="genre", values="count").fillna(0).astype(int)
    return matrix.reindex(_category_order(counts[category_col]))


def sums_by_year_and_binary(df: pd.DataFrame, budget_col: str = "budget_2013",
                            gross_col: str = "domgross_2013") -> pd.DataFrame:
    """
    Summe von Budget und (als Text gespeichertem) Inlands-Einspielergebnis je (Jahr, PASS/FAIL).

    Nicht-numerische Gross-Werte werden aus der Summe ausgeschlossen, statt die
    gesamte Aggregation scheitern zu lassen.

    Returns:
        DataFrame mit Spalten year, binary, budget_sum, gross_sum.
    """
    tmp = df[["year", "binary"]].copy()
    tmp["year"] = coerce_numeric(tmp["year"]).astype("Int64")
    tmp["budget"] = coerce_numeric(df[budget_col])
    tmp["gross"] = coerce_numeric(df[gross_col])

    n_bad_gross = int((df[gross_col].notna() & tmp["gross"].isna()).sum())
    if n_bad_gross:
        logging.info(f"Aggregation: {n_bad_gross} nicht-numerische Werte in '{gross_col}' ignoriert.")

    result = (
        tmp.dropna(subset=["year", "binary"])
           .groupby(["year", "binary"])
           .agg(budget_sum=("budget", "sum"), gross_sum=("gross", "sum"))
           .reset_index()
           .sort_values(["year", "binary"])
           .reset_index(drop=True)
    )
    return result


def summary_statistics(df: pd.DataFrame, columns_map: dict) -> pd.DataFrame:
    """
    Berechnet deskriptive Statistiken für angegebene numerische Spalten.
    Args:
        df: DataFrame mit den Spalten.
        columns_map: Dictionary {'Spaltenname_im_df': 'Anzeigename_im_Bericht'}
    Returns:
        DataFrame mit Statistiken (eine Zeile je Spalte).
    """
    stats = {}
    for col_name, display_name in columns_map.items():
        if col_name not in df.columns:
            logging.warning(f"Statistik-Spalte '{col_name}' nicht im DataFrame gefunden.")
            continue
        series = coerce_numeric(df[col_name]).dropna()
        if not series.empty:
            stats[display_name] = {
                'mean': series.mean(),
                'std': series.std(),
                'min': series.min(),
                'max': series.max(),
                'median': series.median(),
                'count': series.count()
            }
        else:
            stats[display_name] = {k: np.nan for k in ['mean', 'std', 'min', 'max', 'median', 'count']}
    return pd.DataFrame(stats).T.round(2)


def missing_value_counts(df: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame({
        "non_missing": df.notna().sum(),
        "missing": df.isna().sum(),
    }).rename_axis("column").reset_index()
