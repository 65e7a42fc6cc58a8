# bechdel_pipeline/analysis/summary.py
import logging
from pathlib import Path

import pandas as pd

from bechdel_pipeline.transform.recode import clean_test_categorical


def generate_summary_report(
    df: pd.DataFrame,
    report_path: Path,
    aggregates: dict[str, pd.DataFrame] | None = None,
) -> list[str]:
    """
    Schreibt einen Textbericht mit den wichtigsten Kennzahlen des Datensatzes.

    Args:
        df: Bereinigtes DataFrame (Labels bereits übersetzt).
        report_path: Zieldatei des Berichts.
        aggregates: Optionale Ergebnis-Tabellen (Statistiken, Genre-Abdeckung).

    Returns:
        Die geschriebenen Zeilen.
    """
    aggregates = aggregates or {}
    report_lines = []
    report_lines.append("======================================")
    report_lines.append("     Bechdel-Test Datensatz-Bericht    ")
    report_lines.append("======================================")
    report_lines.append(f"Datum der Analyse: {pd.Timestamp.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

    report_lines.append("--- Allgemeine Statistiken ---")
    report_lines.append(f"Anzahl Filme: {len(df)}")
    report_lines.append(f"Anzahl Spalten: {len(df.columns)}")
    if "year" in df.columns and df["year"].notna().any():
        report_lines.append(f"Zeitraum: {df['year'].min()} – {df['year'].max()}")

    if "binary" in df.columns:
        report_lines.append("\nVerteilung PASS/FAIL:")
        for value, count in df["binary"].value_counts(dropna=False).items():
            share = count / len(df) * 100 if len(df) else 0
            report_lines.append(f"  - {value}: {count} ({share:.1f}%)")

    if "clean_test" in df.columns:
        report_lines.append("\nVerteilung nach Bechdel-Kategorie:")
        counts = pd.Series(clean_test_categorical(df["clean_test"])).value_counts(sort=False)
        for label, count in counts.items():
            report_lines.append(f"  - {label}: {count}")

    if "genre" in df.columns:
        n_without_genre = int(df["genre"].isna().sum())
        report_lines.append(f"\nFilme ohne Genre-Angabe: {n_without_genre} (von {len(df)})")
    unmatched = aggregates.get("unmatched_genre_records")
    if unmatched is not None:
        report_lines.append(
            f"Filme ohne bekanntes Genre (nicht in Genre-Auswertungen): {len(unmatched)}")
    genre_counts = aggregates.get("count_by_genre_and_binary")
    if genre_counts is not None and not genre_counts.empty:
        report_lines.append("\nFilme je Genre:")
        totals = genre_counts.groupby("genre")["count"].sum().sort_values(ascending=False)
        for genre, count in totals.items():
            report_lines.append(f"  - {genre}: {count}")

    stats = aggregates.get("summary_statistics")
    if stats is not None and not stats.empty:
        report_lines.append("\n--- Deskriptive Statistiken ---")
        report_lines.append(stats.to_string())

    report_lines.append("\n--- Fehlende Werte je Spalte ---")
    for col in df.columns:
        n_missing = int(df[col].isna().sum())
        if n_missing:
            report_lines.append(f"  - Spalte '{col}' (Typ: {df[col].dtype}): {n_missing} fehlend (von {len(df)})")

    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "w", encoding="utf-8") as f:
        for line in report_lines:
            f.write(line + "\n")
    logging.info(f"Datensatz-Bericht gespeichert unter: {report_path}")
    return report_lines
