from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dataclasses_json import dataclass_json

from vmlicense.dm.disk_reference import DiskReference
from vmlicense.dm.license_mode import LicenseMode
from vmlicense.dm.network_interface import NetworkInterfaceReference
from vmlicense.dm.vm_settings import VmSettings

SUPPORTED_OS_TYPE = "Windows"


@dataclass_json
@dataclass
class VM:
    name: str
    id: str
    resource_group: str
    location: str
    vm_size: Optional[str]
    os_type: Optional[str]
    license_type: Optional[str]
    os_disk: DiskReference
    data_disks: List[DiskReference] = field(default_factory=list)
    network_interfaces: List[NetworkInterfaceReference] = field(default_factory=list)
    availability_set_id: Optional[str] = None
    zones: Optional[List[str]] = None
    tags: Optional[Dict[str, str]] = None
    boot_diagnostics_storage_uri: Optional[str] = None
    settings: VmSettings = field(default_factory=VmSettings)
    # full provider representation, kept verbatim for the backup artifact
    provider_document: Dict[str, Any] = field(default_factory=dict)

    @property
    def license_mode(self) -> Optional[LicenseMode]:
        return LicenseMode.from_marker(self.license_type)

    @property
    def is_supported_guest(self) -> bool:
        return self.os_type is not None and self.os_type.lower() == SUPPORTED_OS_TYPE.lower()

    def resources_deleted_with_vm(self) -> List[str]:
        disks = [self.os_disk] + self.data_disks
        return ([disk.name for disk in disks if disk.is_deleted_with_vm] +
                [nic.id for nic in self.network_interfaces if nic.is_deleted_with_vm])
