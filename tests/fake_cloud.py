import copy
from typing import Dict, List, Optional, Set, Tuple

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.creatable_vm import CreatableVm
from vmlicense.dm.disk_reference import DiskReference, DETACH
from vmlicense.dm.network_interface import NetworkInterfaceReference
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM
from vmlicense.errors import CloudOperationError

MUTATING_CALLS = {"stop_vm", "keep_resources_on_delete", "delete_vm", "create_vm"}


def make_vm(name: str = "web01", resource_group: str = "rg-prod", os_type: str = "Windows",
            license_type: Optional[str] = None, managed: bool = True, data_disk_count: int = 2,
            delete_option: Optional[str] = None) -> VM:
    vm_id = "/subscriptions/sub/resourceGroups/{}/providers/Microsoft.Compute/virtualMachines/{}".format(
        resource_group, name)

    def disk(disk_name: str, lun: Optional[int], size: Optional[int], caching: str) -> DiskReference:
        if managed:
            disk_id = "/subscriptions/sub/resourceGroups/{}/providers/Microsoft.Compute/disks/{}".format(
                resource_group, disk_name)
            return DiskReference(disk_name, managed_disk_id=disk_id, caching=caching, disk_size_gb=size, lun=lun,
                                 delete_option=delete_option)
        uri = "https://storage.blob.core.windows.net/vhds/{}.vhd".format(disk_name)
        return DiskReference(disk_name, vhd_uri=uri, caching=caching, disk_size_gb=size, lun=lun,
                             delete_option=delete_option)

    data_disks = [disk("{}-data{}".format(name, lun), lun, 128 * (lun + 1), "ReadOnly" if lun % 2 else "None")
                  for lun in range(data_disk_count)]

    return VM(
        name=name,
        id=vm_id,
        resource_group=resource_group,
        location="westeurope",
        vm_size="Standard_D2s_v3",
        os_type=os_type,
        license_type=license_type,
        os_disk=disk("{}-os".format(name), None, 127, "ReadWrite"),
        data_disks=data_disks,
        network_interfaces=[NetworkInterfaceReference(
            "/subscriptions/sub/resourceGroups/{}/providers/Microsoft.Network/networkInterfaces/{}-nic"
            .format(resource_group, name), True, delete_option)],
        tags={"env": "prod"},
        provider_document={"id": vm_id, "name": name, "properties": {"licenseType": license_type}}
    )


class FakeCloud(ICloud):
    """
    In-memory cloud that records every call made against it.

    Disks and network interfaces live on after their VM unless the VM references
    them with the Delete option, and a VM can only be created from disks that exist.
    """

    def __init__(self):
        self.vms: Dict[Tuple[str, str], VM] = {}
        self.power_states: Dict[Tuple[str, str], PowerState] = {}
        self.disks: Set[str] = set()
        self.network_interfaces: Set[str] = set()
        self.calls: List[Tuple] = []
        self.created: List[CreatableVm] = []
        self.failing_licenses: Set[Optional[str]] = set()
        self.create_error: Optional[Exception] = None
        self.fail_create_always = False
        self.fail_stop = False
        self.fail_retention = False
        self.fail_delete = False

    def add_vm(self, vm: VM, power_state: PowerState = PowerState.RUNNING) -> VM:
        key = (vm.resource_group.lower(), vm.name.lower())
        self.vms[key] = vm
        self.power_states[key] = power_state
        self.add_resources(vm)
        return vm

    def add_resources(self, vm: VM):
        self.disks.update(disk.name for disk in [vm.os_disk] + vm.data_disks)
        self.network_interfaces.update(nic.id for nic in vm.network_interfaces)

    def mutating_calls(self) -> List[Tuple]:
        return [call for call in self.calls if call[0] in MUTATING_CALLS]

    def vm(self, resource_group_name: str, vm_name: str) -> VM:
        return self.vms[(resource_group_name.lower(), vm_name.lower())]

    def power_state(self, resource_group_name: str, vm_name: str) -> PowerState:
        return self.power_states[(resource_group_name.lower(), vm_name.lower())]

    def list_vms(self, resource_group_name: str = None) -> List[VM]:
        self.calls.append(("list_vms", resource_group_name))
        return [vm for key, vm in self.vms.items()
                if resource_group_name is None or key[0] == resource_group_name.lower()]

    def find_vms(self, vm_name: str, resource_group_name: str = None) -> List[VM]:
        self.calls.append(("find_vms", vm_name, resource_group_name))
        return [vm for key, vm in self.vms.items()
                if key[1] == vm_name.lower() and (resource_group_name is None or key[0] == resource_group_name.lower())]

    def get_power_state(self, resource_group_name: str, vm_name: str) -> PowerState:
        self.calls.append(("get_power_state", resource_group_name, vm_name))
        return self.power_state(resource_group_name, vm_name)

    def stop_vm(self, resource_group_name: str, vm_name: str, stay_provisioned: bool):
        self.calls.append(("stop_vm", resource_group_name, vm_name, stay_provisioned))
        if self.fail_stop:
            raise CloudOperationError("Stop VM {}".format(vm_name), Exception("stop rejected"))
        key = (resource_group_name.lower(), vm_name.lower())
        self.power_states[key] = PowerState.STOPPED if stay_provisioned else PowerState.DEALLOCATED

    def keep_resources_on_delete(self, resource_group_name: str, vm_name: str):
        self.calls.append(("keep_resources_on_delete", resource_group_name, vm_name))
        if self.fail_retention:
            raise CloudOperationError("Update VM {}".format(vm_name), Exception("update rejected"))
        vm = self.vm(resource_group_name, vm_name)
        for disk in [vm.os_disk] + vm.data_disks:
            disk.delete_option = DETACH
        for nic in vm.network_interfaces:
            nic.delete_option = DETACH

    def delete_vm(self, resource_group_name: str, vm_name: str):
        self.calls.append(("delete_vm", resource_group_name, vm_name))
        if self.fail_delete:
            raise CloudOperationError("Delete VM {}".format(vm_name), Exception("delete rejected"))
        key = (resource_group_name.lower(), vm_name.lower())
        vm = self.vms.pop(key)
        del self.power_states[key]
        for disk in [vm.os_disk] + vm.data_disks:
            if disk.is_deleted_with_vm:
                self.disks.discard(disk.name)
        for nic in vm.network_interfaces:
            if nic.is_deleted_with_vm:
                self.network_interfaces.discard(nic.id)

    def create_vm(self, resource_group_name: str, vm: CreatableVm) -> VM:
        self.calls.append(("create_vm", resource_group_name, vm.name, vm.license_type))
        if vm.license_type in self.failing_licenses and self.create_error is not None:
            raise self.create_error
        if self.fail_create_always or vm.license_type in self.failing_licenses:
            raise CloudOperationError("Create VM {}".format(vm.name), Exception("create rejected"))
        missing = [disk.name for disk in [vm.os_disk] + list(vm.data_disks) if disk.name not in self.disks]
        missing += [nic.id for nic in vm.network_interfaces if nic.id not in self.network_interfaces]
        if missing:
            raise CloudOperationError("Create VM {}".format(vm.name),
                                      Exception("not found: {}".format(", ".join(missing))))
        self.created.append(vm)

        created = VM(
            name=vm.name,
            id="/subscriptions/sub/resourceGroups/{}/providers/Microsoft.Compute/virtualMachines/{}".format(
                resource_group_name, vm.name),
            resource_group=resource_group_name,
            location=vm.location,
            vm_size=vm.vm_size,
            os_type=vm.os_type,
            license_type=vm.license_type,
            os_disk=copy.deepcopy(vm.os_disk),
            data_disks=copy.deepcopy(list(vm.data_disks)),
            network_interfaces=copy.deepcopy(list(vm.network_interfaces)),
            availability_set_id=vm.availability_set_id,
            zones=vm.zones,
            tags=vm.tags,
            boot_diagnostics_storage_uri=vm.boot_diagnostics_storage_uri,
            settings=copy.deepcopy(vm.settings)
        )
        # new VMs come up running
        return self.add_vm(created, PowerState.RUNNING)
