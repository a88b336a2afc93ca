from __future__ import annotations

from dataclasses import dataclass

@dataclass(frozen=True)
class HuntTaskDefinition:
    title: str
    description: str = ""
