import json

import pytest

from market_intel.core import targets
from market_intel.core.models import TargetVenue


def test_default_targets_cover_batumi_market():
    loaded = targets.load_targets()
    assert len(loaded) == 12
    assert loaded[0] == TargetVenue("Casino International", "ChIJr4Sl22uGZ0ARAIlIlZkhxqo")


def test_load_targets_from_file(tmp_path):
    path = tmp_path / "targets.json"
    path.write_text(json.dumps([{"name": " Lucky Star ", "placeId": "pid-1"}, {"name": "Golden Palace"}]), encoding="utf-8")

    loaded = targets.load_targets(str(path))

    assert loaded == [TargetVenue("Lucky Star", "pid-1"), TargetVenue("Golden Palace", "")]


def test_load_targets_rejects_non_list(tmp_path):
    path = tmp_path / "targets.json"
    path.write_text(json.dumps({"name": "Lucky Star"}), encoding="utf-8")

    with pytest.raises(ValueError):
        targets.load_targets(str(path))


def test_parse_targets_requires_names():
    with pytest.raises(ValueError):
        targets.parse_targets([{"placeId": "pid"}])
    with pytest.raises(ValueError):
        targets.parse_targets(["Casino Otium"])
