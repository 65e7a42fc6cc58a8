# bechdel_pipeline/analysis/plots.py
import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Nicht-interaktives Backend, Plots werden nur gespeichert
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from bechdel_pipeline.transform.aggregate import coerce_numeric  # noqa: E402
from bechdel_pipeline.transform.recode import clean_test_categorical  # noqa: E402

# --- Globale Stil-Einstellung für Plots ---
plt.style.use('seaborn-v0_8-whitegrid')

BINARY_ORDER = ["PASS", "FAIL"]
BINARY_PALETTE = {"PASS": "#1b9e77", "FAIL": "#d95f02"}

CORRELATION_COLUMNS = {
    'budget_2013': 'Budget (2013$)',
    'domgross_2013': 'Domestic Gross (2013$)',
    'intgross_2013': 'International Gross (2013$)',
    'imdb_rating': 'IMDb Rating',
    'metascore': 'Metascore',
    'runtime': 'Laufzeit (min)',
    'year': 'Jahr',
}


def _save(fig, output_dir: Path, filename: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = output_dir / filename
    fig.tight_layout()
    fig.savefig(file_path)
    plt.close(fig)
    logging.info(f"Plot '{filename}' gespeichert in '{file_path}'.")
    return file_path


def _runtime_minutes(series: pd.Series) -> pd.Series:
    # "112 min" -> 112
    return coerce_numeric(series.astype(str).str.extract(r"(\d+)", expand=False))


def plot_binary_counts(df: pd.DataFrame, output_dir: Path) -> Path | None:
    if "binary" not in df.columns or df["binary"].dropna().empty:
        logging.info("Keine PASS/FAIL-Werte für Balkendiagramm vorhanden.")
        return None
    order = [b for b in BINARY_ORDER if b in set(df["binary"])]
    fig, ax = plt.subplots(figsize=(6, 5))
    sns.countplot(data=df, x="binary", order=order, hue="binary", palette=BINARY_PALETTE,
                  legend=False, ax=ax)
    ax.set_title("Bechdel-Test: bestanden vs. nicht bestanden")
    ax.set_xlabel("")
    ax.set_ylabel("Anzahl Filme")
    return _save(fig, output_dir, "bar_01_binary_counts.png")


def plot_clean_test_counts(df: pd.DataFrame, output_dir: Path) -> Path | None:
    if "clean_test" not in df.columns or df["clean_test"].dropna().empty:
        logging.info("Keine Bechdel-Kategorien für Balkendiagramm vorhanden.")
        return None
    categories = clean_test_categorical(df["clean_test"])
    counts = pd.Series(categories).value_counts(sort=False)
    fig, ax = plt.subplots(figsize=(9, 5))
    sns.barplot(x=counts.values, y=counts.index.astype(str), color="#4c72b0", ax=ax)
    ax.set_title("Filme je Bechdel-Kategorie")
    ax.set_xlabel("Anzahl Filme")
    ax.set_ylabel("")
    return _save(fig, output_dir, "bar_02_clean_test_counts.png")


def plot_median_budget(median_df: pd.DataFrame, output_dir: Path) -> Path | None:
    if median_df is None or median_df.empty:
        logging.info("Kein Median-Budget je Kategorie vorhanden.")
        return None
    fig, ax = plt.subplots(figsize=(9, 5))
    sns.barplot(data=median_df, x="median_budget", y="clean_test", color="#55a868", ax=ax)
    ax.set_title("Median-Budget (2013$) je Bechdel-Kategorie")
    ax.set_xlabel("Median-Budget (2013$)")
    ax.set_ylabel("")
    return _save(fig, output_dir, "bar_03_median_budget_by_category.png")


def plot_histograms(df: pd.DataFrame, output_dir: Path) -> Path | None:
    hist_cols = {'budget_2013': 'Budget (2013$)', 'imdb_rating': 'IMDb Rating'}
    valid_cols = {k: v for k, v in hist_cols.items()
                  if k in df.columns and not coerce_numeric(df[k]).dropna().empty}
    if not valid_cols:
        logging.info("Keine gültigen Daten für Histogramme.")
        return None

    fig, axes = plt.subplots(1, len(valid_cols), figsize=(7 * len(valid_cols), 5), squeeze=False)
    for ax, (col, title) in zip(axes.flatten(), valid_cols.items()):
        sns.histplot(coerce_numeric(df[col]).dropna(), bins=30, ax=ax)
        ax.set_title(f"Verteilung: {title}")
        ax.set_xlabel(title)
        ax.set_ylabel('Anzahl Filme')
    return _save(fig, output_dir, "hist_01_budget_rating.png")


def plot_budget_boxplot(df: pd.DataFrame, output_dir: Path) -> Path | None:
    if not {"budget_2013", "clean_test"}.issubset(df.columns):
        return None
    data = pd.DataFrame({
        "budget_2013": coerce_numeric(df["budget_2013"]),
        "clean_test": clean_test_categorical(df["clean_test"]),
    }).dropna()
    if data.empty:
        logging.info("Keine Budgetdaten für Boxplot vorhanden.")
        return None
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.boxplot(data=data, x="budget_2013", y="clean_test", color="#8172b3", ax=ax)
    ax.set_title("Budget (2013$) je Bechdel-Kategorie")
    ax.set_xlabel("Budget (2013$)")
    ax.set_ylabel("")
    return _save(fig, output_dir, "box_01_budget_by_category.png")


def plot_category_genre_heatmap(matrix: pd.DataFrame, output_dir: Path) -> Path | None:
    if matrix is None or matrix.empty:
        logging.info("Keine Kategorie/Genre-Matrix für Heatmap vorhanden.")
        return None
    fig, ax = plt.subplots(figsize=(max(10, len(matrix.columns)), 5))
    sns.heatmap(matrix, annot=True, fmt="d", cmap="viridis", ax=ax)
    ax.set_title("Anzahl Filme je Bechdel-Kategorie und Genre")
    ax.set_xlabel("Genre")
    ax.set_ylabel("")
    return _save(fig, output_dir, "heatmap_01_category_genre.png")


def plot_genre_binary_counts(counts: pd.DataFrame, output_dir: Path) -> Path | None:
    if counts is None or counts.empty:
        return None
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(data=counts, x="genre", y="count", hue="binary",
                hue_order=[b for b in BINARY_ORDER if b in set(counts["binary"])],
                palette=BINARY_PALETTE, ax=ax)
    ax.set_title("Bechdel-Test je Genre")
    ax.set_xlabel("")
    ax.set_ylabel("Anzahl Filme")
    ax.tick_params(axis='x', rotation=45)
    return _save(fig, output_dir, "bar_04_genre_binary_counts.png")


def plot_correlation_matrix(df: pd.DataFrame, output_dir: Path) -> Path | None:
    numeric = pd.DataFrame(index=df.index)
    for col, label in CORRELATION_COLUMNS.items():
        if col not in df.columns:
            continue
        values = _runtime_minutes(df[col]) if col == "runtime" else coerce_numeric(df[col])
        if not values.dropna().empty:
            numeric[label] = values.astype(float)
    if len(numeric.columns) < 2:
        logging.info("Nicht genügend numerische Spalten für Korrelationsmatrix.")
        return None

    corr_matrix = numeric.corr()
    fig, ax = plt.subplots(figsize=(max(8, len(numeric.columns)), max(6, len(numeric.columns) - 2)))
    sns.heatmap(corr_matrix, annot=True, cmap='coolwarm', vmin=-1, vmax=1, fmt=".2f", ax=ax)
    ax.set_title("Korrelationen numerischer Merkmale")
    return _save(fig, output_dir, "corr_heatmap_01_numeric.png")


def plot_yearly_sums(sums: pd.DataFrame, output_dir: Path) -> Path | None:
    if sums is None or sums.empty:
        logging.info("Keine Jahressummen für Liniendiagramme vorhanden.")
        return None
    data = sums.astype({"year": int})
    hue_order = [b for b in BINARY_ORDER if b in set(data["binary"])]
    fig, axes = plt.subplots(2, 1, figsize=(12, 9), sharex=True)
    for ax, (col, title) in zip(axes, [("budget_sum", "Budget-Summe (2013$)"),
                                        ("gross_sum", "Domestic-Gross-Summe (2013$)")]):
        sns.lineplot(data=data, x="year", y=col, hue="binary", hue_order=hue_order,
                     palette=BINARY_PALETTE, ax=ax)
        ax.set_title(f"{title} je Jahr")
        ax.set_ylabel(title)
    axes[-1].set_xlabel("Jahr")
    return _save(fig, output_dir, "line_01_yearly_sums.png")


def plot_budget_vs_gross(df: pd.DataFrame, output_dir: Path) -> Path | None:
    if not {"budget_2013", "domgross_2013"}.issubset(df.columns):
        return None
    data = pd.DataFrame({
        "budget_2013": coerce_numeric(df["budget_2013"]),
        "domgross_2013": coerce_numeric(df["domgross_2013"]),
    }).dropna()
    if len(data) < 3:
        logging.info("Zu wenige vollständige Budget/Gross-Paare für Scatterplot.")
        return None
    fig, ax = plt.subplots(figsize=(9, 7))
    # lowess-Glättung läuft über statsmodels
    sns.regplot(data=data, x="budget_2013", y="domgross_2013", lowess=True,
                scatter_kws={"alpha": 0.3}, line_kws={"color": "red"}, ax=ax)
    ax.set_title("Budget vs. Domestic Gross (2013$)")
    ax.set_xlabel("Budget (2013$)")
    ax.set_ylabel("Domestic Gross (2013$)")
    return _save(fig, output_dir, "scatter_01_budget_vs_gross.png")


def render_all(df: pd.DataFrame, aggregates: dict[str, pd.DataFrame], output_dir: Path) -> list[Path]:
    """
    Rendert alle Diagramme nacheinander.

    Ein fehlschlagendes Diagramm wird geloggt, die übrigen werden trotzdem erstellt.

    Args:
        df: Bereinigtes DataFrame (Labels bereits übersetzt).
        aggregates: Ergebnis-Tabellen des Aggregators.
        output_dir: Zielverzeichnis der PNG-Dateien.

    Returns:
        Liste der geschriebenen Dateien.
    """
    jobs = [
        ("binary_counts", plot_binary_counts, df),
        ("clean_test_counts", plot_clean_test_counts, df),
        ("median_budget", plot_median_budget, aggregates.get("median_budget_by_category")),
        ("histograms", plot_histograms, df),
        ("budget_boxplot", plot_budget_boxplot, df),
        ("category_genre_heatmap", plot_category_genre_heatmap, aggregates.get("category_genre_matrix")),
        ("genre_binary_counts", plot_genre_binary_counts, aggregates.get("count_by_genre_and_binary")),
        ("correlation_matrix", plot_correlation_matrix, df),
        ("yearly_sums", plot_yearly_sums, aggregates.get("sums_by_year_and_binary")),
        ("budget_vs_gross", plot_budget_vs_gross, df),
    ]
    written: list[Path] = []
    for name, func, data in jobs:
        try:
            path = func(data, output_dir)
        except Exception as e:
            logging.error(f"Fehler beim Erstellen des Diagramms '{name}': {e}", exc_info=True)
            plt.close("all")
            continue
        if path is not None:
            written.append(path)
    logging.info(f"{len(written)} Diagramme gespeichert in '{output_dir}'.")
    return written
