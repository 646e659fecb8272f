import logging

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.creatable_vm import CreatableVm
from vmlicense.errors import ReconciliationFailedError

logger = logging.getLogger(__name__)


class Recreator:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def recreate(self, resource_group_name: str, new_vm: CreatableVm, old_vm: CreatableVm, backup_path: str) -> bool:
        """Returns True if the VM had to be recreated with its old license."""
        # the VM is already gone here, any failure to create it goes to the fallback
        try:
            self.cloud.create_vm(resource_group_name, new_vm)
            return False
        except Exception as e:
            logger.warning("Recreating VM %s with license %s failed: %s. Recreating it with its previous license %s",
                           new_vm.name, new_vm.license_type, e, old_vm.license_type)

        try:
            self.cloud.create_vm(resource_group_name, old_vm)
        except Exception as e:
            logger.critical("VM %s was deleted and could not be recreated. Recreate it by hand from %s",
                            old_vm.name, backup_path)
            raise ReconciliationFailedError("VM {} was deleted and could not be recreated: {}."
                                            .format(old_vm.name, e), backup_path) from e

        return True
