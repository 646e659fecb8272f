import logging

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM
from vmlicense.errors import CloudOperationError, ConfirmationRequiredError, StopFailedError

logger = logging.getLogger(__name__)


class PowerController:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def ensure_stopped(self, vm: VM, power_state: PowerState, force: bool) -> bool:
        """Returns True if a stop was issued."""
        if not power_state.is_running:
            return False

        if not force:
            raise ConfirmationRequiredError("VM {} is running. It has to be stopped before it is recreated; "
                                            "run again with --force to stop it".format(vm.name))

        logger.info("Stopping VM %s", vm.name)
        try:
            self.cloud.stop_vm(vm.resource_group, vm.name, stay_provisioned=False)
        except CloudOperationError as e:
            raise StopFailedError("Could not stop VM {}: {}".format(vm.name, e)) from e

        return True
