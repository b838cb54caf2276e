from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

log = logging.getLogger(__name__)


class AmmoType(Enum):
    SHOT = "Shot"
    AP_SHOT = "AP Shot"
    AP_SHELL = "AP Shell"
    HE_SHELL = "HE Shell"
    MORTAR_STONE = "Mortar Stone"
    SMOKE_SHELL = "Smoke Shell"


@dataclass(frozen=True, eq=False)
class AmmoProfile:
    kind: AmmoType
    drag: float
    gravity: float

    @property
    def name(self) -> str:
        return self.kind.value

    def __eq__(self, other) -> bool:
        if not isinstance(other, AmmoProfile):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


AMMO_CATALOG: Dict[AmmoType, AmmoProfile] = {
    AmmoType.SHOT: AmmoProfile(kind=AmmoType.SHOT, drag=0.01, gravity=10.0),
    AmmoType.AP_SHOT: AmmoProfile(kind=AmmoType.AP_SHOT, drag=0.01, gravity=10.0),
    AmmoType.AP_SHELL: AmmoProfile(kind=AmmoType.AP_SHELL, drag=0.01, gravity=10.0),
    AmmoType.HE_SHELL: AmmoProfile(kind=AmmoType.HE_SHELL, drag=0.01, gravity=10.0),
    AmmoType.MORTAR_STONE: AmmoProfile(kind=AmmoType.MORTAR_STONE, drag=0.01, gravity=5.0),
    AmmoType.SMOKE_SHELL: AmmoProfile(kind=AmmoType.SMOKE_SHELL, drag=0.01, gravity=10.0),
}


def ammo_names() -> List[str]:
    return [kind.value for kind in AMMO_CATALOG]


def select_ammo(name: str) -> AmmoProfile:
    """Profile for a display name. Unknown names fall back to plain Shot,
    the same as the in-game calculator this tool mirrors."""
    try:
        return AMMO_CATALOG[AmmoType(name)]
    except ValueError:
        log.warning("unknown ammo type %r, falling back to %s", name, AmmoType.SHOT.value)
        return AMMO_CATALOG[AmmoType.SHOT]
