# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from sheetplot.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        # keep the developer's real inference settings out of tests
        monkeypatch.delenv("SHEETPLOT_API_KEY", raising=False)
        monkeypatch.delenv("SHEETPLOT_INFERENCE_ENDPOINT", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """highlight_field: Latento
palette: ["#ef4444", "#3b82f6", "#10b981"]
default_color: "#4f46e5"
theme: dark
output_dir: ./out
null_sentinels: ["N/A", "null"]
inference:
  endpoint: null
  api_key: null
  timeout_seconds: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sheetplot.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def cities_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "cities.csv"
    f.write_text(
        "Name,Latitude,Longitude,Country,Latento\n"
        "Paris,\"48,8566\",\"2,3522\",FR,10kg\n"
        "New York,40.7128,-74.0060,US,5kg\n"
        "Sydney,S33.8688,151.2093,AU,bad\n"
        "Nowhere,0,0,XX,1\n"
        "Broken,abc,12.5,XX,\n"
        "Tokyo,35.6762,139.6503,JP,N/A\n",
        encoding="utf-8",
    )
    return f


@pytest.fixture()
def combined_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "combined.csv"
    f.write_text(
        "place,coords\n"
        "Paris,\"48.8566, 2.3522\"\n"
        "NYC,\"40.7;-74.0\"\n"
        "Bad,nonsense\n",
        encoding="utf-8",
    )
    return f
