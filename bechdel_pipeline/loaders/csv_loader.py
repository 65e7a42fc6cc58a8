import logging
from pathlib import Path

import pandas as pd


class CsvLoader:
    def __init__(self, path: str | Path, index: bool = False):
        self.path = Path(path)
        self.index = index

    def load(self, df: pd.DataFrame) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(self.path, index=self.index)
        logging.info(f"Tabelle ({len(df)} Zeilen) gespeichert unter: {self.path}")
        return self.path
