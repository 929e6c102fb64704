import sys
from pathlib import Path

import pytest

# Ensure `market_intel` package is importable when running pytest from the worker directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def model_text():
    return "\n".join([
        "Here is the latest data for Batumi casinos:",
        "",
        "| Name | Rating | Reviews | Place ID | Address |",
        "|---|---|---|---|---|",
        "| Casino Otium | 4.6 | 1,204 | ChIJ7bPMpg2HZ0AR7w95mwJxPfE | Rustaveli St |",
        "| Casino International | 4.3 stars | 2,310 reviews | N/A | 1 Rustaveli Ave |",
        "| Eclipse Casino | 4.1 | 0 | ChIJT7S5CJyFZ0AROGvduE06fIw | Gorgiladze St |",
        "",
        "Casino Otium remains the highest rated venue.",
    ])
