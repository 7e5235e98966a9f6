from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ..models import Schedule


@dataclass
class GenerateResult:
    status:      str                      # FOUND / NONE
    schedules:   List[Schedule]  = field(default_factory=list)
    diagnostics: List[str]       = field(default_factory=list)
    # precheck errors: no schedule can exist until these are fixed
    errors:      List[str]       = field(default_factory=list)
    stats:       Dict[str, Any]  = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return bool(self.schedules)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status":      self.status,
            "schedules":   [
                {rid: asdict(section) for rid, section in sched.items()}
                for sched in self.schedules
            ],
            "diagnostics": list(self.diagnostics),
            "errors":      list(self.errors),
            "stats":       dict(self.stats),
        }
