from dataclasses import dataclass, field
from typing import List, Optional

from dataclasses_json import dataclass_json


@dataclass_json
@dataclass
class PurchasePlan:
    name: str
    publisher: str
    product: str
    promotion_code: Optional[str] = None


@dataclass_json
@dataclass
class VmSettings:
    """Settings the provider requires to match the attached disks, or that would otherwise be lost."""
    disk_controller_type: Optional[str] = None
    security_type: Optional[str] = None
    secure_boot_enabled: Optional[bool] = None
    vtpm_enabled: Optional[bool] = None
    encryption_at_host: Optional[bool] = None
    plan: Optional[PurchasePlan] = None
    identity_type: Optional[str] = None
    user_assigned_identity_ids: List[str] = field(default_factory=list)
    proximity_placement_group_id: Optional[str] = None
    priority: Optional[str] = None
    eviction_policy: Optional[str] = None
    max_price: Optional[float] = None
    ultra_ssd_enabled: Optional[bool] = None
    hibernation_enabled: Optional[bool] = None
