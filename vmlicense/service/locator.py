import logging
from typing import Tuple

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM
from vmlicense.errors import AmbiguousNameError, NotFoundError

logger = logging.getLogger(__name__)


class Locator:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def locate(self, vm_name: str, resource_group_name: str = None) -> Tuple[VM, PowerState]:
        if vm_name is None or vm_name.strip() == "":
            raise NotFoundError("VM name must not be empty")

        vms = self.cloud.find_vms(vm_name, resource_group_name)
        if len(vms) == 0:
            scope = "" if resource_group_name is None else " in resource group {}".format(resource_group_name)
            raise NotFoundError("VM {} was not found{}".format(vm_name, scope))
        if len(vms) > 1:
            ids = "\n".join(vm.id for vm in vms)
            raise AmbiguousNameError("{} VMs are named {}, pass a resource group to pick one:\n{}"
                                     .format(len(vms), vm_name, ids))

        vm = vms[0]
        power_state = self.cloud.get_power_state(vm.resource_group, vm.name)
        logger.info("Found VM %s (%s), power state: %s", vm.name, vm.id, power_state.value)

        return vm, power_state
