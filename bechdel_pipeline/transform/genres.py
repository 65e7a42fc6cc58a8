# bechdel_pipeline/transform/genres.py
from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

GENRE_TOKENS: List[str] = [
    "Action",
    "Adventure",
    "Animation",
    "Biography",
    "Comedy",
    "Crime",
    "Drama",
    "Family",
    "Fantasy",
    "History",
    "Horror",
    "Musical",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Thriller",
    "Western",
]

DEFAULT_ID_COLUMNS: List[str] = ["imdb", "title", "year", "binary", "clean_test"]


def genre_flag_column(token: str) -> str:
    """'Sci-Fi' -> 'sci_fi'"""
    return token.lower().replace("-", "_")


def expand_genres(df: pd.DataFrame, tokens: Sequence[str] = GENRE_TOKENS,
                  genre_col: str = "genre") -> pd.DataFrame:
    """
    Zerlegt die freie Genre-Zeichenkette in eine boolesche Spalte je bekanntem Genre.

    Zeilen ohne Genre werden vorher entfernt. Die Erkennung ist ein einfacher
    Teilstring-Test (kein Regex, Groß-/Kleinschreibung wird beachtet).

    Args:
        df: Bereinigtes DataFrame mit Spalte genre_col.
        tokens: Liste der bekannten Genres.
        genre_col: Name der Genre-Spalte.

    Returns:
        Breites DataFrame: eine Zeile je Film, eine bool-Spalte je Genre.
    """
    if genre_col not in df.columns:
        raise KeyError(f"Genre-Spalte '{genre_col}' fehlt im DataFrame.")

    wide = df[df[genre_col].notna()].copy()
    n_dropped = len(df) - len(wide)
    if n_dropped:
        logging.info(f"Genres: {n_dropped} Zeilen ohne Genre entfernt.")

    genre_text = wide[genre_col].astype(str)
    for token in tokens:
        wide[genre_flag_column(token)] = genre_text.str.contains(token, regex=False)

    logging.info(f"Genres: {len(wide)} Filme auf {len(tokens)} Genre-Spalten verteilt.")
    return wide


def unmatched_genre_records(wide: pd.DataFrame,
                            tokens: Sequence[str] = GENRE_TOKENS) -> pd.DataFrame:
    """Filme, bei denen kein einziges bekanntes Genre erkannt wurde."""
    flag_cols = [genre_flag_column(t) for t in tokens if genre_flag_column(t) in wide.columns]
    if not flag_cols:
        return wide.copy()
    return wide[~wide[flag_cols].any(axis=1)].copy()


def genres_to_long(wide: pd.DataFrame, tokens: Sequence[str] = GENRE_TOKENS,
                   id_columns: Sequence[str] | None = None) -> pd.DataFrame:
    """
    Wide -> Long: eine Zeile je (Film, vorhandenes Genre).

    Filme ohne erkanntes Genre tauchen im Ergebnis nicht auf.
    """
    flag_map = {genre_flag_column(t): t for t in tokens}
    flag_cols = [c for c in flag_map if c in wide.columns]
    ids = [c for c in (id_columns or DEFAULT_ID_COLUMNS) if c in wide.columns]

    n_unmatched = len(unmatched_genre_records(wide, tokens))
    if n_unmatched:
        logging.warning(
            f"Genres: {n_unmatched} Filme ohne bekanntes Genre fallen aus den Genre-Auswertungen heraus."
        )

    # Zeilenindex als Schlüssel mitführen, damit Filme ohne ID-Spalten unterscheidbar bleiben
    melted = (
        wide[ids + flag_cols]
        .rename_axis("record")
        .reset_index()
        .melt(id_vars=["record"] + ids, value_vars=flag_cols,
              var_name="genre_flag", value_name="present")
    )
    long_df = melted[melted["present"].astype(bool)].copy()
    long_df["genre"] = long_df["genre_flag"].map(flag_map)
    long_df = (
        long_df.drop(columns=["genre_flag", "present"])
               .sort_values(["record", "genre"], kind="stable")
               .reset_index(drop=True)
    )
    return long_df
