import logging
from typing import Optional

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.power_state import PowerState
from vmlicense.errors import CloudOperationError

logger = logging.getLogger(__name__)


class PowerRestorer:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def restore(self, resource_group_name: str, vm_name: str, original_power_state: PowerState) -> Optional[str]:
        """
        Puts a recreated VM back into the power state it had before the run.

        Failures are logged and returned, never raised: the VM exists at this point.
        """
        if original_power_state.is_running:
            return None

        stay_provisioned = original_power_state == PowerState.STOPPED
        logger.info("Returning VM %s to power state %s", vm_name, original_power_state.value)
        try:
            self.cloud.stop_vm(resource_group_name, vm_name, stay_provisioned=stay_provisioned)
        except CloudOperationError as e:
            logger.error("Could not return VM %s to power state %s: %s", vm_name, original_power_state.value, e)
            return str(e)

        return None
