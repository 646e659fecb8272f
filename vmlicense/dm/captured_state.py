import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dataclasses_json import dataclass_json

from vmlicense.dm.disk_reference import DiskReference
from vmlicense.dm.network_interface import NetworkInterfaceReference
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM
from vmlicense.dm.vm_settings import VmSettings


@dataclass_json
@dataclass(frozen=True)
class CapturedState:
    vm_name: str
    resource_group: str
    location: str
    os_type: str
    power_state: PowerState
    license_type: Optional[str]
    vm_size: Optional[str]
    os_disk: DiskReference
    data_disks: List[DiskReference]
    network_interfaces: List[NetworkInterfaceReference]
    availability_set_id: Optional[str] = None
    zones: Optional[List[str]] = None
    tags: Optional[Dict[str, str]] = None
    boot_diagnostics_storage_uri: Optional[str] = None
    settings: VmSettings = field(default_factory=VmSettings)

    @classmethod
    def capture(cls, vm: VM, power_state: PowerState) -> "CapturedState":
        return CapturedState(
            vm_name=vm.name,
            resource_group=vm.resource_group,
            location=vm.location,
            os_type=vm.os_type,
            power_state=power_state,
            license_type=vm.license_type,
            vm_size=vm.vm_size,
            os_disk=copy.deepcopy(vm.os_disk),
            data_disks=copy.deepcopy(vm.data_disks),
            network_interfaces=copy.deepcopy(vm.network_interfaces),
            availability_set_id=vm.availability_set_id,
            zones=None if vm.zones is None else list(vm.zones),
            tags=None if vm.tags is None else dict(vm.tags),
            boot_diagnostics_storage_uri=vm.boot_diagnostics_storage_uri,
            settings=copy.deepcopy(vm.settings)
        )
