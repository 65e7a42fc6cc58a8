from pathlib import Path
import logging
import pandas as pd

# Fallback, wenn keine Verzeichnisse aus der Config übergeben werden
DEFAULT_AUX_DIRS = {
    "invalid": "data/validation_reports/invalid",
    "duplicates": "data/validation_reports/duplicates",
}


def _get_target_dir(kind: str, aux_dirs: dict | None = None) -> Path:
    """Liefert das Zielverzeichnis für eine CSV-Art (invalid/duplicates)."""
    dirs = aux_dirs or DEFAULT_AUX_DIRS
    return Path(dirs.get(kind, f"data/validation_reports/{kind}"))


def save_aux_csv(kind: str, adapter_name: str, df: pd.DataFrame,
                 aux_dirs: dict | None = None) -> Path:
    """Speichert DataFrame unter <dir>/<adapter_name>_<kind>.csv."""
    target_dir = _get_target_dir(kind, aux_dirs)
    target_dir.mkdir(parents=True, exist_ok=True)
    out_path = target_dir / f"{adapter_name}_{kind}.csv"
    df.to_csv(out_path, index=False)
    logging.info(f"{adapter_name}: {len(df)} Zeilen ({kind}) gespeichert unter {out_path}")
    return out_path
