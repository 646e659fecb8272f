from vmlicense.dm.license_mode import LicenseMode
from vmlicense.dm.vm import VM, SUPPORTED_OS_TYPE
from vmlicense.errors import NoOpError, UnsupportedGuestError


def check_preconditions(vm: VM, requested_mode: LicenseMode):
    if not vm.is_supported_guest:
        raise UnsupportedGuestError("VM {} runs {}; only {} VMs can use the hybrid benefit"
                                    .format(vm.name, vm.os_type, SUPPORTED_OS_TYPE))

    if vm.license_mode is None:
        raise UnsupportedGuestError("VM {} uses the {} license, which can only be changed by hand"
                                    .format(vm.name, vm.license_type))

    if vm.license_mode == requested_mode:
        raise NoOpError("VM {} already uses the {} license".format(vm.name, requested_mode.value))
