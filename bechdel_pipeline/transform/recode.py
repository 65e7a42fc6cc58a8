# bechdel_pipeline/transform/recode.py
import logging

import pandas as pd

# Feste Zuordnung Rohcode -> Anzeigename (geschlossene Aufzählung)
CLEAN_TEST_LABELS: dict[str, str] = {
    "dubious": "Barely Passed",
    "ok": "Passed",
    "nowomen": "Fewer than two women",
    "notalk": "Women don't talk to each other",
    "men": "Women only talk about men",
}

# Anzeigereihenfolge der fünf Kategorien
CLEAN_TEST_ORDER: list[str] = [
    "Barely Passed",
    "Passed",
    "Fewer than two women",
    "Women don't talk to each other",
    "Women only talk about men",
]

RANK_COLUMN = "clean_test_rank"


def recode_label(value):
    """Liefert den Anzeigenamen für einen bekannten Code, sonst den Wert selbst."""
    if isinstance(value, str):
        return CLEAN_TEST_LABELS.get(value, value)
    return value


def recode_clean_test(df: pd.DataFrame, column: str = "clean_test") -> pd.DataFrame:
    """
    Übersetzt die Fail-Reason-Codes in lesbare Labels und vergibt die Sortierposition.

    Unbekannte Codes bleiben unverändert stehen und erhalten keinen Rang.

    Args:
        df: DataFrame mit der Rohspalte.
        column: Name der Spalte mit den Codes.

    Returns:
        Neues DataFrame mit ersetzter Spalte und zusätzlicher Spalte 'clean_test_rank'.
    """
    out = df.copy()
    if column not in out.columns:
        logging.warning(f"Recode: Spalte '{column}' fehlt, nichts zu tun.")
        return out

    out[column] = out[column].map(recode_label)
    rank_lookup = {label: pos for pos, label in enumerate(CLEAN_TEST_ORDER)}
    out[RANK_COLUMN] = out[column].map(rank_lookup).astype("Int64")

    unknown = out[column].notna() & out[RANK_COLUMN].isna()
    if unknown.any():
        logging.warning(
            f"Recode: {int(unknown.sum())} Zeilen mit unbekanntem Code in '{column}' "
            f"(unverändert übernommen): {sorted(out.loc[unknown, column].astype(str).unique())}"
        )
    return out


def sort_by_clean_test(df: pd.DataFrame) -> pd.DataFrame:
    """Stabile Sortierung nach Kategorie-Rang; Zeilen ohne Rang landen am Ende."""
    if RANK_COLUMN not in df.columns:
        df = recode_clean_test(df)
    return df.sort_values(RANK_COLUMN, kind="stable", na_position="last")


def clean_test_categorical(series: pd.Series) -> pd.Categorical:
    # die fünf festen Labels zuerst, unbekannte Werte hinten anhängen
    extras = sorted(
        {v for v in series.dropna().unique() if v not in CLEAN_TEST_ORDER},
        key=str,
    )
    return pd.Categorical(series, categories=CLEAN_TEST_ORDER + extras, ordered=True)
