# bechdel_pipeline/adapters/tidytuesday_adapter.py
import logging
from pathlib import Path

import pandas as pd

from bechdel_pipeline.adapters.base_adapter import BaseAdapter
from bechdel_pipeline.transform.normalize import clean_title, normalize_flag

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/rfordatascience/tidytuesday/master/data/{year}/{key}/"
DEFAULT_PUBLICATION_KEY = "2021-03-09"
DEFAULT_FILE_NAME = "movies.csv"

# Geldspalten, die in der Quelle als Text vorliegen (z.B. "#N/A")
TEXT_MONEY_COLUMNS = ["domgross", "intgross", "domgross_2013", "intgross_2013"]
NUMERIC_COLUMNS = ["budget", "budget_2013", "imdb_rating", "metascore"]


class TidyTuesdayAdapter(BaseAdapter):
    """Adapter für den Bechdel-/Filmdatensatz einer TidyTuesday-Woche.

    • year           Int64
    • title          str, HTML-Entities aufgelöst
    • binary         'PASS' / 'FAIL'
    • clean_test     Rohcode (nowomen, notalk, men, dubious, ok)
    • budget_2013    float (inflationsbereinigt, kann fehlen)
    • domgross_2013  Text, wird erst bei der Aggregation numerisch
    • genre          str, kommagetrennt (kann fehlen)
    """

    @property
    def source_url(self) -> str:
        key = str(self.config.get("publication_key", DEFAULT_PUBLICATION_KEY))
        base_url = self.config.get("base_url", DEFAULT_BASE_URL)
        file_name = self.config.get("file_name", DEFAULT_FILE_NAME)
        return base_url.format(key=key, year=key[:4]) + file_name

    # ------------------------------------------------------------ #
    # 1) Extract                                                   #
    # ------------------------------------------------------------ #
    def extract(self) -> pd.DataFrame:  # type: ignore[override]
        read_kwargs = {"dtype": {c: str for c in TEXT_MONEY_COLUMNS}}

        file_path = self.config.get("file_path")
        if file_path:
            if Path(file_path).exists():
                logging.info(f"TidyTuesdayAdapter: lese lokale Datei {file_path}")
                return pd.read_csv(file_path, **read_kwargs)
            logging.warning(
                f"TidyTuesdayAdapter: lokale Datei {file_path} nicht gefunden, lade aus dem Netz.")

        url = self.source_url
        logging.info(f"TidyTuesdayAdapter: lade Datensatz von {url}")
        try:
            df = pd.read_csv(url, **read_kwargs)
        except Exception as e:
            # kein Retry: ohne Daten kann die Pipeline nicht weiterlaufen
            logging.error(f"TidyTuesdayAdapter: Download von {url} fehlgeschlagen: {e}",
                          exc_info=True)
            raise
        logging.info(f"TidyTuesdayAdapter: {len(df)} Zeilen x {len(df.columns)} Spalten geladen.")

        cache_path = self.config.get("cache_path")
        if cache_path:
            cache_path = Path(cache_path)
            try:
                cache_path.parent.mkdir(parents=True, exist_ok=True)
                df.to_csv(cache_path, index=False)
                logging.info(f"TidyTuesdayAdapter: Kopie gespeichert unter {cache_path}")
            except OSError as e:
                # Daten liegen bereits im Speicher, die Kopie ist optional
                logging.error(f"TidyTuesdayAdapter: Kopie nach {cache_path} nicht gespeichert: {e}",
                              exc_info=True)
        return df

    # ------------------------------------------------------------ #
    # 2) Transform                                                 #
    # ------------------------------------------------------------ #
    def transform(self, df: pd.DataFrame) -> pd.DataFrame:  # type: ignore[override]
        missing = {"title", "year"}.difference(df.columns)
        if missing:
            raise KeyError(f"TidyTuesdayAdapter: Pflichtspalten fehlen: {', '.join(sorted(missing))}")

        df = df.copy()

        # ---------- Titel, Jahr ------------------------------------
        df["title"] = df["title"].apply(clean_title)
        df["year"] = pd.to_numeric(df["year"], errors="coerce").astype("Int64")

        # ---------- Kategorien --------------------------------------
        if "binary" in df.columns:
            df["binary"] = df["binary"].apply(normalize_flag)
        if "clean_test" in df.columns:
            df["clean_test"] = df["clean_test"].where(
                df["clean_test"].isna(), df["clean_test"].astype(str).str.strip())

        # ---------- Numerik (Gross-Spalten bleiben Text) -------------
        for col in NUMERIC_COLUMNS:
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")

        # ---------- Invalid + Duplikate -----------------------------
        invalid_mask = (df["title"].str.len() == 0) | df["year"].isna()
        invalid_rows = df[invalid_mask].assign(reason="empty title or invalid year")
        df = df[~invalid_mask]

        if "imdb" in df.columns:
            dupes_mask = df["imdb"].notna() & df.duplicated(subset=["imdb"], keep="first")
        else:
            dupes_mask = df.duplicated(subset=["title", "year"], keep="first")
        duplicate_rows = df[dupes_mask].assign(reason="duplicate imdb id")
        df = df[~dupes_mask]

        if len(invalid_rows) or len(duplicate_rows):
            logging.warning(
                f"TidyTuesdayAdapter: {len(invalid_rows)} ungültige Zeilen und "
                f"{len(duplicate_rows)} Duplikate entfernt.")
        self._log_aux_files("TidyTuesdayAdapter", invalid_rows, duplicate_rows)

        return df.reset_index(drop=True)
