import logging
from typing import List, Tuple
from datetime import datetime
import pandas as pd
from pathlib import Path

from bechdel_pipeline.transform.recode import CLEAN_TEST_LABELS, CLEAN_TEST_ORDER

CURRENT_YEAR: int = datetime.now().year
YEAR_MIN: int = 1888
YEAR_MAX: int = CURRENT_YEAR + 1
REQUIRED_BASE_COLS: List[str] = ["title", "year", "binary", "clean_test"]
BINARY_VALUES: set[str] = {"PASS", "FAIL"}
NUMERIC_COLUMNS: List[str] = ["budget_2013"]


def validate_dataframe(
    df: pd.DataFrame,
    *,
    required_cols: List[str] | None = None,
    allow_empty: bool = False,
    df_name: str | None = None,
    log_level: int = logging.WARNING,
    error_report_path: str | None = None,
    save_invalid_rows: bool = False,
    invalid_rows_output_path: str = "invalid_rows_found.csv",
) -> Tuple[bool, List[str]]:
    name = df_name or "DataFrame"
    errors: List[str] = []
    invalid_rows_parts: List[pd.DataFrame] = []

    # 0) Leerer DataFrame
    if df.empty and not allow_empty:
        errors.append(f"{name} ist leer.")

    # 1) Pflichtspalten prüfen
    req_cols = set(REQUIRED_BASE_COLS + (required_cols or []))
    missing = req_cols.difference(df.columns)
    if missing:
        errors.append(f"{name}: fehlende Spalten: {', '.join(sorted(missing))}")

    # 2) Jahr
    if "year" in df.columns:
        years = pd.to_numeric(df["year"], errors="coerce")
        invalid_year_mask = (~years.between(YEAR_MIN, YEAR_MAX)) | years.isna()
        if invalid_year_mask.any():
            n_bad = invalid_year_mask.sum()
            errors.append(
                f"{name}: {n_bad} Zeilen mit ungültigem Jahr (<{YEAR_MIN} oder >{YEAR_MAX} oder NaN)."
            )
            if save_invalid_rows:
                invalid_rows_parts.append(df[invalid_year_mask])

    # 3) PASS/FAIL
    if "binary" in df.columns:
        bad_binary = ~df["binary"].isin(BINARY_VALUES)
        if bad_binary.any():
            found = sorted(df.loc[bad_binary, "binary"].astype(str).unique())
            errors.append(
                f"{name}: {bad_binary.sum()} Zeilen mit unbekanntem Wert in 'binary': {found}")
            if save_invalid_rows:
                invalid_rows_parts.append(df[bad_binary])

    # 4) Fail-Reason-Codes (Rohcode oder bereits übersetztes Label)
    if "clean_test" in df.columns:
        known = set(CLEAN_TEST_LABELS) | set(CLEAN_TEST_ORDER)
        unknown = df["clean_test"].notna() & ~df["clean_test"].isin(known)
        if unknown.any():
            found = sorted(df.loc[unknown, "clean_test"].astype(str).unique())
            errors.append(
                f"{name}: {unknown.sum()} Zeilen mit unbekanntem Code in 'clean_test': {found}")

    # 5) Numerische Spalten
    for col in NUMERIC_COLUMNS:
        if col in df.columns and not pd.api.types.is_numeric_dtype(df[col]):
            errors.append(
                f"{name}: Spalte {col} ist nicht numerisch (dtype={df[col].dtype}).")

    # 6) Duplikate imdb-ID
    if "imdb" in df.columns:
        dupes = df["imdb"].notna() & df.duplicated(subset=["imdb"], keep=False)
        if dupes.any():
            errors.append(f"{name}: {dupes.sum()} Zeilen mit doppelter imdb-ID.")

    for msg in errors:
        logging.log(log_level, msg)

    # --- Fehlerhafte Zeilen speichern ---
    if save_invalid_rows:
        try:
            if invalid_rows_parts:
                invalid_df = pd.concat(invalid_rows_parts)
                invalid_df = invalid_df[~invalid_df.index.duplicated(keep="first")]
            else:
                # Leere CSV mit Spaltenkopf erstellen
                invalid_df = df.head(0).copy()
            out_path = Path(invalid_rows_output_path)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            invalid_df.to_csv(out_path, index=False)
            logging.info(
                f"{name}: Fehlerhafte Zeilen gespeichert unter {out_path} (Anzahl: {len(invalid_df)})"
            )
        except OSError as e:
            logging.error(
                f"{name}: Fehler beim Speichern fehlerhafter Zeilen: {e}")

    # --- Fehlerreport speichern ---
    if error_report_path and errors:
        try:
            rep_path = Path(error_report_path)
            rep_path.parent.mkdir(parents=True, exist_ok=True)
            rep_path.write_text("\n".join(errors), encoding="utf-8")
            logging.info(f"{name}: Fehlerreport gespeichert unter {rep_path}")
        except OSError as e:
            logging.error(
                f"{name}: Fehler beim Speichern des Fehlerreports: {e}")

    return len(errors) == 0, errors


def validate_or_raise(
    df: pd.DataFrame,
    **kwargs,
) -> None:
    ok, errs = validate_dataframe(df, **kwargs)
    if not ok:
        joined = "\n - ".join(errs)
        raise ValueError(f"Validation Fehler:\n - {joined}")
