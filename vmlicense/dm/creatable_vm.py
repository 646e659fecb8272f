import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vmlicense.dm.disk_reference import DiskReference
from vmlicense.dm.network_interface import NetworkInterfaceReference
from vmlicense.dm.vm_settings import VmSettings

ATTACH = "Attach"


@dataclass(frozen=True)
class CreatableVm:
    """
    A VM definition that can only be created by attaching existing disks.

    It has no image reference, OS profile, resource group association or
    disk/NIC name shortcuts, since the provider rejects those when the VM is
    built from disks that already exist.
    """
    name: str
    location: str
    vm_size: Optional[str]
    os_type: str
    license_type: Optional[str]
    os_disk: DiskReference
    data_disks: List[DiskReference]
    network_interfaces: List[NetworkInterfaceReference]
    availability_set_id: Optional[str] = None
    zones: Optional[List[str]] = None
    tags: Optional[Dict[str, str]] = None
    boot_diagnostics_storage_uri: Optional[str] = None
    settings: VmSettings = field(default_factory=VmSettings)
    create_option: str = ATTACH


class CreatableVmBuilder:
    name: str
    location: str
    vm_size: Optional[str]
    os_type: Optional[str]
    license_type: Optional[str]
    os_disk: Optional[DiskReference]
    data_disks: List[DiskReference]
    network_interfaces: List[NetworkInterfaceReference]

    def __init__(self, name: str, location: str, vm_size: str = None):
        self.name = name
        self.location = location
        self.vm_size = vm_size
        self.os_type = None
        self.license_type = None
        self.os_disk = None
        self.data_disks = []
        self.network_interfaces = []
        self.availability_set_id = None
        self.zones = None
        self.tags = None
        self.boot_diagnostics_storage_uri = None
        self.settings = VmSettings()

    def attach_os_disk(self, disk: DiskReference) -> "CreatableVmBuilder":
        # attaching an OS disk resets the OS type on the provider model,
        # it has to be set again afterwards via with_os_type
        self.os_disk = DiskReference(
            name=disk.name,
            managed_disk_id=disk.managed_disk_id,
            vhd_uri=disk.vhd_uri,
            caching=disk.caching,
            delete_option=disk.delete_option
        )
        self.os_type = None
        return self

    def attach_data_disk(self, disk: DiskReference) -> "CreatableVmBuilder":
        if disk.lun is None:
            raise ValueError("Data disk {} has no logical unit number".format(disk.name))
        if any(d.lun == disk.lun for d in self.data_disks):
            raise ValueError("Logical unit number {} is already in use".format(disk.lun))
        self.data_disks.append(copy.deepcopy(disk))
        return self

    def with_os_type(self, os_type: str) -> "CreatableVmBuilder":
        self.os_type = os_type
        return self

    def with_license_type(self, license_type: Optional[str]) -> "CreatableVmBuilder":
        self.license_type = license_type
        return self

    def with_network_interface(self, nic: NetworkInterfaceReference) -> "CreatableVmBuilder":
        self.network_interfaces.append(copy.deepcopy(nic))
        return self

    def with_availability_set(self, availability_set_id: Optional[str]) -> "CreatableVmBuilder":
        self.availability_set_id = availability_set_id
        return self

    def with_zones(self, zones: Optional[List[str]]) -> "CreatableVmBuilder":
        self.zones = None if zones is None else list(zones)
        return self

    def with_tags(self, tags: Optional[Dict[str, str]]) -> "CreatableVmBuilder":
        self.tags = None if tags is None else dict(tags)
        return self

    def with_boot_diagnostics(self, storage_uri: Optional[str]) -> "CreatableVmBuilder":
        self.boot_diagnostics_storage_uri = storage_uri
        return self

    def with_settings(self, settings: VmSettings) -> "CreatableVmBuilder":
        self.settings = copy.deepcopy(settings)
        return self

    def build(self) -> CreatableVm:
        if self.os_disk is None:
            raise ValueError("VM {} has no OS disk attached".format(self.name))
        if self.os_type is None:
            raise ValueError("VM {} has no OS type; it must be set after the OS disk is attached".format(self.name))

        return CreatableVm(
            name=self.name,
            location=self.location,
            vm_size=self.vm_size,
            os_type=self.os_type,
            license_type=self.license_type,
            os_disk=copy.deepcopy(self.os_disk),
            data_disks=copy.deepcopy(self.data_disks),
            network_interfaces=copy.deepcopy(self.network_interfaces),
            availability_set_id=self.availability_set_id,
            zones=None if self.zones is None else list(self.zones),
            tags=None if self.tags is None else dict(self.tags),
            boot_diagnostics_storage_uri=self.boot_diagnostics_storage_uri,
            settings=copy.deepcopy(self.settings)
        )
