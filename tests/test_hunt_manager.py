from __future__ import annotations

import json
from pathlib import Path

import pytest

from scavenger_hunt.hunts import hunt_manager
from scavenger_hunt.hunts.hunt_manager import DEFAULT_HUNT_PATH, HuntManager, parse_hunt
from scavenger_hunt.util.errors import HuntDefinitionError


def test_bundled_hunt_has_the_three_default_tasks(tmp_path: Path) -> None:
    mgr = HuntManager(user_hunt_path=tmp_path / "missing.json")
    titles = [d.title for d in mgr.definitions]
    assert titles == ["Find a red flower", "Capture a sunset", "Spot a squirrel"]
    assert mgr.definitions[1].description == "Take a photo of the sunset"


def test_bundled_hunt_ships_inside_the_package() -> None:
    package_root = Path(hunt_manager.__file__).resolve().parents[1]
    assert DEFAULT_HUNT_PATH.is_file()
    assert DEFAULT_HUNT_PATH.is_relative_to(package_root)
    assert DEFAULT_HUNT_PATH == package_root / "config" / "default_hunt.json"


def test_user_hunt_replaces_defaults(tmp_path: Path) -> None:
    user = tmp_path / "hunt.json"
    user.write_text(
        json.dumps({"name": "Park Hunt", "tasks": [{"title": "Find a bench", "description": "Sit on it"}]}),
        encoding="utf-8",
    )
    mgr = HuntManager(user_hunt_path=user)
    assert mgr.name == "Park Hunt"
    assert [d.title for d in mgr.definitions] == ["Find a bench"]
    assert mgr.source_path == user


def test_build_tasks_gives_fresh_tasks_with_unique_ids(tmp_path: Path) -> None:
    mgr = HuntManager(user_hunt_path=tmp_path / "missing.json")
    first = mgr.build_tasks()
    second = mgr.build_tasks()
    ids = {t.id for t in first} | {t.id for t in second}
    assert len(ids) == 6
    assert all(not t.is_completed and not t.uploaded and t.image is None for t in first)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"tasks": []},
        {"tasks": "nope"},
        {"tasks": [{"description": "no title"}]},
        {"tasks": ["not an object"]},
    ],
)
def test_malformed_hunts_are_rejected(payload) -> None:
    with pytest.raises(HuntDefinitionError):
        parse_hunt(payload)


def test_invalid_json_is_a_hunt_error(tmp_path: Path) -> None:
    user = tmp_path / "hunt.json"
    user.write_text("{not json", encoding="utf-8")
    with pytest.raises(HuntDefinitionError):
        HuntManager(user_hunt_path=user)


def test_missing_name_defaults(tmp_path: Path) -> None:
    name, defs = parse_hunt({"tasks": [{"title": "  Trim me  "}]})
    assert name == "Scavenger Hunt"
    assert defs[0].title == "Trim me"
    assert defs[0].description == ""
