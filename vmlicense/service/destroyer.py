import logging

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.vm import VM
from vmlicense.errors import CloudOperationError, DeletionFailedError, DiskRetentionError

logger = logging.getLogger(__name__)


class Destroyer:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def destroy(self, vm: VM, backup_path: str):
        deleted_with_vm = vm.resources_deleted_with_vm()
        if deleted_with_vm:
            # deleting the VM would take these along and leave nothing to recreate it from
            logger.info("Setting %s of VM %s to be kept when the VM is deleted", ", ".join(deleted_with_vm), vm.name)
            try:
                self.cloud.keep_resources_on_delete(vm.resource_group, vm.name)
            except CloudOperationError as e:
                raise DiskRetentionError("VM {} was not deleted because {} could not be set to be kept: {}"
                                         .format(vm.name, ", ".join(deleted_with_vm), e)) from e

        logger.info("Deleting VM %s, its disks are kept", vm.name)
        try:
            self.cloud.delete_vm(vm.resource_group, vm.name)
        except CloudOperationError as e:
            raise DeletionFailedError("Deleting VM {} failed and its state is unknown: {}. Backup: {}"
                                      .format(vm.name, e, backup_path)) from e
