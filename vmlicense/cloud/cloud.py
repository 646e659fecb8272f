from abc import abstractmethod
from typing import List

from vmlicense.dm.creatable_vm import CreatableVm
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM


class ICloud:
    @abstractmethod
    def list_vms(self, resource_group_name: str = None) -> List[VM]: pass

    @abstractmethod
    def find_vms(self, vm_name: str, resource_group_name: str = None) -> List[VM]: pass

    @abstractmethod
    def get_power_state(self, resource_group_name: str, vm_name: str) -> PowerState: pass

    @abstractmethod
    def stop_vm(self, resource_group_name: str, vm_name: str, stay_provisioned: bool): pass

    @abstractmethod
    def keep_resources_on_delete(self, resource_group_name: str, vm_name: str): pass

    @abstractmethod
    def delete_vm(self, resource_group_name: str, vm_name: str): pass

    @abstractmethod
    def create_vm(self, resource_group_name: str, vm: CreatableVm) -> VM: pass
