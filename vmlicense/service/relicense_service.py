import logging

from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.captured_state import CapturedState
from vmlicense.dm.license_mode import LicenseMode
from vmlicense.dm.relicense_result import RelicenseResult, RelicenseStage
from vmlicense.errors import RebuildError, ReconciliationFailedError
from vmlicense.service.descriptor_rebuilder import DescriptorRebuilder
from vmlicense.service.destroyer import Destroyer
from vmlicense.service.locator import Locator
from vmlicense.service.power_controller import PowerController
from vmlicense.service.power_restorer import PowerRestorer
from vmlicense.service.precondition_checker import check_preconditions
from vmlicense.service.recreator import Recreator
from vmlicense.storage.backup_writer import BackupWriter

logger = logging.getLogger(__name__)


class RelicenseService:
    """
    Switches a VM between the hybrid benefit and the standard license.

    The license of an existing VM cannot be changed in place, so the VM is deleted
    and created again from its existing disks. Runs must not overlap on the same VM.
    """
    cloud: ICloud
    backup_writer: BackupWriter

    def __init__(self, cloud: ICloud, backup_writer: BackupWriter):
        self.cloud = cloud
        self.backup_writer = backup_writer
        self.locator = Locator(cloud)
        self.power_controller = PowerController(cloud)
        self.destroyer = Destroyer(cloud)
        self.rebuilder = DescriptorRebuilder()
        self.recreator = Recreator(cloud)
        self.power_restorer = PowerRestorer(cloud)

    def set_license(self, vm_name: str, requested_mode: LicenseMode, force: bool = False,
                    resource_group_name: str = None) -> RelicenseResult:
        vm, power_state = self.locator.locate(vm_name, resource_group_name)
        self._log_stage(vm.name, RelicenseStage.LOCATED)

        check_preconditions(vm, requested_mode)
        self._log_stage(vm.name, RelicenseStage.VALIDATED)

        backup_path = self.backup_writer.write(vm)
        self._log_stage(vm.name, RelicenseStage.BACKED_UP)

        state = CapturedState.capture(vm, power_state)
        self._log_stage(vm.name, RelicenseStage.CAPTURED)

        # nothing may be stopped or deleted unless both descriptors can be built
        try:
            new_vm, old_vm = self.rebuilder.rebuild(state, requested_mode)
        except ValueError as e:
            raise RebuildError("VM {} cannot be recreated from its disks: {}".format(vm.name, e)) from e

        if self.power_controller.ensure_stopped(vm, power_state, force):
            self._log_stage(vm.name, RelicenseStage.STOPPED)

        self.destroyer.destroy(vm, backup_path)
        self._log_stage(vm.name, RelicenseStage.DESTROYED)

        self._log_stage(vm.name, RelicenseStage.RECREATING)
        try:
            rolled_back = self.recreator.recreate(state.resource_group, new_vm, old_vm, backup_path)
        except ReconciliationFailedError:
            self._log_stage(vm.name, RelicenseStage.RECONCILIATION_FAILED)
            raise
        if rolled_back:
            stage = RelicenseStage.ROLLED_BACK
            license_mode = LicenseMode.from_marker(state.license_type)
        else:
            stage = RelicenseStage.RECREATED
            license_mode = requested_mode
        self._log_stage(vm.name, stage)

        power_error = self.power_restorer.restore(state.resource_group, state.vm_name, state.power_state)
        if power_error is None:
            self._log_stage(vm.name, RelicenseStage.POWER_RESTORED)
            if not rolled_back:
                stage = RelicenseStage.POWER_RESTORED

        return RelicenseResult(
            vm_name=vm.name,
            stage=stage,
            backup_path=backup_path,
            license_mode=license_mode,
            rolled_back=rolled_back,
            power_restored=power_error is None,
            power_error=power_error
        )

    @classmethod
    def _log_stage(cls, vm_name: str, stage: RelicenseStage):
        logger.info("VM %s: %s", vm_name, stage.value)
