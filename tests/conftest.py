import json

import pytest


@pytest.fixture
def docs_dir(tmp_path):
    """A folder with one document of each kind the converter meets."""
    src = tmp_path / "docs"
    src.mkdir()
    (src / "goblin.json").write_text(
        json.dumps({"name": "Goblin", "entries": "{@atk mw} {@hit 4} to hit. {@h}5 ({@damage 1d6 + 2})"}),
        encoding="utf-8",
    )
    (src / "blank.json").write_text(json.dumps({"name": "Blank", "entries": None}), encoding="utf-8")
    (src / "fireball.yaml").write_text(
        "name: Fireball\nentries: 'A bright streak, {@dc 15} Dexterity save.'\n",
        encoding="utf-8",
    )
    return src
