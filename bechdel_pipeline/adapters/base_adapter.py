from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

from bechdel_pipeline.utils.save_aux_csv import save_aux_csv


class BaseAdapter(ABC):
    def __init__(self, source_config: dict):
        self.config = source_config

    @abstractmethod
    def extract(self) -> Any:
        """Lädt Rohdaten (ein DataFrame oder Roh-Objekte)"""
        pass

    @abstractmethod
    def transform(self, data: Any) -> pd.DataFrame:
        """Bereinigt und typisiert die Quelldaten zu einem DataFrame"""
        pass

    def _log_aux_files(
        self,
        adapter_name: str,
        invalid_rows: pd.DataFrame,
        duplicate_rows: pd.DataFrame,
    ) -> None:
        aux_dirs = self.config.get("aux_output_dirs")
        if not invalid_rows.empty:
            save_aux_csv("invalid", adapter_name, invalid_rows, aux_dirs)
        if not duplicate_rows.empty:
            save_aux_csv("duplicates", adapter_name, duplicate_rows, aux_dirs)
