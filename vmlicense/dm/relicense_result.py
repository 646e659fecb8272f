from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vmlicense.dm.license_mode import LicenseMode


class RelicenseStage(Enum):
    LOCATED = "Located"
    VALIDATED = "Validated"
    BACKED_UP = "BackedUp"
    CAPTURED = "Captured"
    STOPPED = "Stopped"
    DESTROYED = "Destroyed"
    RECREATING = "Recreating"
    RECREATED = "Recreated"
    ROLLED_BACK = "RolledBack"
    RECONCILIATION_FAILED = "ReconciliationFailed"
    POWER_RESTORED = "PowerRestored"


@dataclass
class RelicenseResult:
    vm_name: str
    stage: RelicenseStage
    backup_path: str
    license_mode: LicenseMode
    rolled_back: bool = False
    power_restored: bool = True
    power_error: Optional[str] = None
