from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from appdirs import user_config_dir

from scavenger_hunt.core.task import HuntTask
from scavenger_hunt.hunts.models import HuntTaskDefinition
from scavenger_hunt.util.errors import HuntDefinitionError
from scavenger_hunt.util.paths import resource_path

DEFAULT_HUNT_PATH = resource_path("config/default_hunt.json")

def _user_hunt_path() -> Path:
    cfg_dir = Path(user_config_dir(appname="ScavengerHunt", appauthor=False))
    return cfg_dir / "hunt.json"

class HuntManager:
    """Loads the task list a session starts with.

    Resolution:
    - user hunt file (explicit path, else hunt.json in the user config dir) when it exists
    - otherwise the bundled scavenger_hunt/config/default_hunt.json (read-only)
    """

    def __init__(
        self,
        default_hunt_path: Path | None = None,
        user_hunt_path: Path | None = None,
    ) -> None:
        self.default_hunt_path = default_hunt_path or DEFAULT_HUNT_PATH
        self.user_hunt_path = user_hunt_path or _user_hunt_path()
        self.name = "Scavenger Hunt"
        self.definitions: list[HuntTaskDefinition] = []
        self.source_path: Path | None = None
        self.load()

    def load(self) -> None:
        path = self.user_hunt_path if self.user_hunt_path.exists() else self.default_hunt_path
        self.name, self.definitions = load_hunt_file(path)
        self.source_path = path

    def build_tasks(self) -> list[HuntTask]:
        return [HuntTask(title=d.title, description=d.description) for d in self.definitions]


def load_hunt_file(path: Path) -> tuple[str, list[HuntTaskDefinition]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise HuntDefinitionError(f"Hunt file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise HuntDefinitionError(f"Hunt file is not valid JSON: {path} ({e})") from e
    return parse_hunt(data, source=str(path))


def parse_hunt(data: Any, source: str = "<hunt>") -> tuple[str, list[HuntTaskDefinition]]:
    if not isinstance(data, dict):
        raise HuntDefinitionError(f"{source}: expected a JSON object.")
    raw_tasks = data.get("tasks")
    if not isinstance(raw_tasks, list) or not raw_tasks:
        raise HuntDefinitionError(f"{source}: 'tasks' must be a non-empty list.")

    defs: list[HuntTaskDefinition] = []
    for i, t in enumerate(raw_tasks, start=1):
        if not isinstance(t, dict):
            raise HuntDefinitionError(f"{source}: task {i} must be an object.")
        title = str(t.get("title") or "").strip()
        if not title:
            raise HuntDefinitionError(f"{source}: task {i} is missing a title.")
        defs.append(HuntTaskDefinition(title=title, description=str(t.get("description") or "").strip()))
    name = str(data.get("name") or "Scavenger Hunt").strip() or "Scavenger Hunt"
    return name, defs
