from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .collection import DEFAULT_COLLECTION
from .errors import ConstructionError
from .grid import validate_dimensions

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConstructionError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    rows: int = 4
    columns: int = 4
    tiles_needed_for_match: int = 2
    collection: str = DEFAULT_COLLECTION
    debug: bool = False

    def __post_init__(self) -> None:
        validate_dimensions(self.rows, self.columns)
        # The grid places one pair per group.
        if self.tiles_needed_for_match != 2:
            raise ConstructionError(
                f"tiles_needed_for_match must be 2 for a paired grid, got {self.tiles_needed_for_match!r}"
            )

    def tile_count(self) -> int:
        return self.rows * self.columns

    def pairs_needed(self) -> int:
        return self.tile_count() // 2

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GameConfig":
        env = os.environ if env is None else env
        base = cls()
        return cls(
            rows=_env_int(env, "KANAMEMO_ROWS", base.rows),
            columns=_env_int(env, "KANAMEMO_COLUMNS", base.columns),
            collection=env.get("KANAMEMO_COLLECTION", "").strip() or base.collection,
            debug=env.get("KANAMEMO_DEBUG", "").strip().lower() in _TRUTHY,
        )
