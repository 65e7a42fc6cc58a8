import yaml
import logging
from pathlib import Path
import pandas as pd

# Adapter-Importe
from bechdel_pipeline.adapters.tidytuesday_adapter import TidyTuesdayAdapter

# Transformations-Importe
from bechdel_pipeline.transform.recode import recode_clean_test, sort_by_clean_test
from bechdel_pipeline.transform.genres import (GENRE_TOKENS, expand_genres, genres_to_long,
                                               unmatched_genre_records)
from bechdel_pipeline.transform.aggregate import (category_genre_matrix, count_by_category_and_genre,
                                                  count_by_genre_and_binary, median_budget_by_category,
                                                  missing_value_counts, sums_by_year_and_binary,
                                                  summary_statistics)

# Loader-/Analyse-Importe
from bechdel_pipeline.loaders.csv_loader import CsvLoader
from bechdel_pipeline.utils.basic_validator import validate_dataframe
from bechdel_pipeline.analysis.plots import render_all
from bechdel_pipeline.analysis.summary import generate_summary_report

STATISTICS_COLUMNS = {
    'budget_2013': 'Budget (2013$)',
    'domgross_2013': 'Domestic Gross (2013$)',
    'intgross_2013': 'International Gross (2013$)',
    'imdb_rating': 'IMDb Rating',
    'metascore': 'Metascore',
}


class BechdelPipeline:
    """
    Orchestriert die Analyse vom Laden des Datensatzes über Bereinigung,
    Genre-Zerlegung und Aggregation bis zu Diagrammen und Bericht.
    """

    def __init__(self, config_filename: str | Path = 'config.yaml'):
        """
        Initialisiert die Pipeline.

        Liest die Konfigurationsdatei ein und initialisiert das Logging.

        Args:
            config_filename: Pfad zur YAML-Konfigurationsdatei; relative Pfade
                             werden relativ zum Speicherort dieses Skripts aufgelöst.

        Raises:
            FileNotFoundError: Wenn die Konfigurationsdatei nicht gefunden wird.
            yaml.YAMLError: Wenn die Konfigurationsdatei nicht gültig ist.
        """
        script_dir = Path(__file__).resolve().parent
        config_path = Path(config_filename)
        if not config_path.is_absolute():
            config_path = script_dir / config_path

        if not config_path.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {config_path}")

        # Relative Pfade in der Config beziehen sich auf deren Verzeichnis
        self.base_dir: Path = config_path.parent

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self.config: dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logging.error(
                f"Fehler beim Parsen der Konfigurationsdatei {config_path}: {e}"
            )
            raise

        if self.config is None:  # yaml.safe_load liefert None bei leerer Datei
            self.config = {}
            logging.warning(
                f"Konfigurationsdatei {config_path} ist leer oder enthält keine gültige YAML-Struktur."
            )

        log_config: dict = self.config.get('logging') or {}
        level_name = str(log_config.get('level', 'INFO')).upper()
        level_value = getattr(logging, level_name, logging.INFO)
        logging.basicConfig(
            level=level_value,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S')
        logging.getLogger().setLevel(level_value)
        self.logger = logging.getLogger(__name__)

        self.output_cfg: dict = self.config.get('output') or {}
        self.processing_cfg: dict = self.config.get('processing') or {}
        self.validation_reports_dir: Path = self._resolve_path(
            self.output_cfg.get("validation_reports_dir", "data/validation_reports"))

    def _resolve_path(self, path_value: str | Path) -> Path:
        """
        Konvertiert einen Pfadwert aus der Konfiguration in ein absolutes Path-Objekt.

        Raises:
            ValueError: Wenn der path_value weder ein String noch ein Path-Objekt ist.
        """
        if isinstance(path_value, Path):
            path_obj = path_value
        elif isinstance(path_value, str):
            path_obj = Path(path_value)
        else:
            self.logger.error(
                f"Ungültiger Pfadwert in Config: {path_value} (Typ: {type(path_value)})"
            )
            raise ValueError(
                f"Pfadwert muss ein String oder Path-Objekt sein: {path_value}")

        if path_obj.is_absolute():
            return path_obj
        return (self.base_dir / path_obj).resolve()

    def _adapter_config(self) -> dict:
        raw_cfg = (self.config.get("sources") or {}).get("TidyTuesdayAdapter") or {}
        adapter_cfg = {
            key: (self._resolve_path(value) if key.endswith("_path") and value else value)
            for key, value in raw_cfg.items()
        }
        aux_dirs = raw_cfg.get("aux_output_dirs")
        if aux_dirs:
            adapter_cfg["aux_output_dirs"] = {k: self._resolve_path(v) for k, v in aux_dirs.items()}
        else:
            adapter_cfg["aux_output_dirs"] = {
                kind: self.validation_reports_dir / kind for kind in ("invalid", "duplicates")
            }
        return adapter_cfg

    def _load(self) -> pd.DataFrame:
        """Lädt und typisiert den Datensatz. Fehler beim Laden brechen den Lauf ab."""
        adapter = TidyTuesdayAdapter(self._adapter_config())
        raw_df = adapter.extract()
        df = adapter.transform(raw_df)
        self.logger.info(f"Datensatz geladen: {len(raw_df)} Rohzeilen, {len(df)} nach Bereinigung.")

        ok, errs = validate_dataframe(
            df,
            df_name="Bechdel-DF",
            error_report_path=str(self.validation_reports_dir / "Bechdel-DF_report.txt"),
            save_invalid_rows=True,
            invalid_rows_output_path=str(self.validation_reports_dir / "Bechdel-DF_invalid_rows.csv"))
        if not ok:
            self.logger.warning(f"Validation-Probleme im Datensatz: {errs}")
        return df

    def _aggregate(self, cleaned_df: pd.DataFrame) -> dict[str, pd.DataFrame]:
        tokens = self.processing_cfg.get("genre_tokens") or GENRE_TOKENS

        wide_df = expand_genres(cleaned_df, tokens)
        long_df = genres_to_long(wide_df, tokens)
        self.logger.info(f"Genre-Tabelle (long): {len(long_df)} Zeilen aus {len(wide_df)} Filmen.")

        return {
            "genre_flags": wide_df,
            "genres_long": long_df,
            "unmatched_genre_records": unmatched_genre_records(wide_df, tokens),
            "median_budget_by_category": median_budget_by_category(cleaned_df),
            "count_by_genre_and_binary": count_by_genre_and_binary(long_df),
            "count_by_category_and_genre": count_by_category_and_genre(long_df),
            "category_genre_matrix": category_genre_matrix(long_df),
            "sums_by_year_and_binary": sums_by_year_and_binary(cleaned_df),
            "summary_statistics": summary_statistics(cleaned_df, STATISTICS_COLUMNS),
            "missing_values": missing_value_counts(cleaned_df),
        }

    def _save_tables(self, tables: dict[str, pd.DataFrame]) -> None:
        if not self.output_cfg.get("save_tables", True):
            self.logger.info("Speichern der Tabellen deaktiviert (output.save_tables=false).")
            return
        tables_dir = self._resolve_path(self.output_cfg.get("tables_dir", "data/processed"))
        for name, table in tables.items():
            # Matrix und Statistik tragen ihre Beschriftung im Index
            keep_index = name in ("category_genre_matrix", "summary_statistics")
            try:
                CsvLoader(tables_dir / f"{name}.csv", index=keep_index).load(table)
            except OSError as e:
                self.logger.error(f"Fehler beim Speichern der Tabelle '{name}': {e}", exc_info=True)

    def run(self) -> dict[str, pd.DataFrame]:
        """Führt die gesamte Pipeline aus und liefert alle Ergebnis-Tabellen."""
        self.logger.info("Starte Bechdel-Analyse...")

        df = self._load()
        cleaned_df = sort_by_clean_test(recode_clean_test(df))

        tables = {"movies_clean": cleaned_df}
        tables.update(self._aggregate(cleaned_df))
        self._save_tables(tables)

        if self.output_cfg.get("render_plots", True):
            plots_dir = self._resolve_path(self.output_cfg.get("plots_dir", "data/analysis/plots"))
            render_all(cleaned_df, tables, plots_dir)
        else:
            self.logger.info("Diagramme deaktiviert (output.render_plots=false).")

        report_path = self._resolve_path(
            self.output_cfg.get("report_path", "data/analysis/bechdel_report.txt"))
        try:
            generate_summary_report(cleaned_df, report_path, tables)
        except OSError as e:
            self.logger.error(f"Fehler beim Speichern des Berichts: {e}", exc_info=True)

        self.logger.info("Bechdel-Analyse abgeschlossen.")
        return tables


if __name__ == '__main__':
    pipeline = BechdelPipeline(config_filename='config.yaml')
    pipeline.run()
