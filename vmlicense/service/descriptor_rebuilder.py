from typing import Optional, Tuple

from vmlicense.dm.captured_state import CapturedState
from vmlicense.dm.creatable_vm import CreatableVm, CreatableVmBuilder
from vmlicense.dm.license_mode import LicenseMode


class DescriptorRebuilder:

    def rebuild(self, state: CapturedState, requested_mode: LicenseMode) -> Tuple[CreatableVm, CreatableVm]:
        """
        Builds the VM to submit with the requested license and the one to fall back to.

        Returns:
            (new license descriptor, old license descriptor); they only differ in license_type.
        """
        new_vm = self._build(state, requested_mode.marker)
        old_vm = self._build(state, state.license_type)

        return new_vm, old_vm

    @classmethod
    def _build(cls, state: CapturedState, license_type: Optional[str]) -> CreatableVm:
        builder = CreatableVmBuilder(state.vm_name, state.location, state.vm_size)
        builder.attach_os_disk(state.os_disk)
        for disk in state.data_disks:
            builder.attach_data_disk(disk)
        builder.with_os_type(state.os_type)
        builder.with_settings(state.settings)

        for nic in state.network_interfaces:
            builder.with_network_interface(nic)

        return (builder
                .with_license_type(license_type)
                .with_availability_set(state.availability_set_id)
                .with_zones(state.zones)
                .with_tags(state.tags)
                .with_boot_diagnostics(state.boot_diagnostics_storage_uri)
                .build())
