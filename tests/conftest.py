import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def movies_df() -> pd.DataFrame:
    """Kleiner Ausschnitt im Schema des veröffentlichten Datensatzes."""
    return pd.DataFrame({
        "year": [2013, 2013, 2012, 2012, 2011, 2010, 2010],
        "imdb": ["tt1", "tt2", "tt3", "tt4", "tt5", "tt6", "tt7"],
        "title": ["Ocean&#39;s Twelve", "Gravity", "Brave", "Skyfall", "Drive", "Inception", "Tangled"],
        "clean_test": ["ok", "notalk", "dubious", "men", "nowomen", "ok", "notalk"],
        "binary": ["PASS", "FAIL", "PASS", "FAIL", "FAIL", "PASS", "FAIL"],
        "budget_2013": [100.0, 200.0, 150.0, None, 80.0, 300.0, 120.0],
        "domgross_2013": ["500", "#N/A", "250", "300", None, "800", "400"],
        "intgross_2013": ["900", "1000", "600", "1100", "90", "1500", "700"],
        "genre": ["Comedy, Crime", "Drama, Sci-Fi", "Animation, Family", "Action, Thriller",
                  None, "Action, Sci-Fi", "Foobar"],
        "imdb_rating": [6.5, 7.8, 7.2, 7.8, 7.9, 8.8, 7.7],
        "metascore": [58, 96, 69, 81, 78, 74, 71],
        "runtime": ["125 min", "91 min", "93 min", "143 min", "100 min", "148 min", "100 min"],
    })
