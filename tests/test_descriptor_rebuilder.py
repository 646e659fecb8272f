import pytest

from tests.fake_cloud import make_vm
from vmlicense.dm.captured_state import CapturedState
from vmlicense.dm.creatable_vm import ATTACH, CreatableVm, CreatableVmBuilder
from vmlicense.dm.disk_reference import DiskReference
from vmlicense.dm.license_mode import LicenseMode
from vmlicense.dm.power_state import PowerState
from vmlicense.service.descriptor_rebuilder import DescriptorRebuilder


def captured(**kwargs) -> CapturedState:
    return CapturedState.capture(make_vm(**kwargs), PowerState.RUNNING)


def test_rebuild_sets_requested_license() -> None:
    new_vm, old_vm = DescriptorRebuilder().rebuild(captured(license_type=None), LicenseMode.HYBRID)
    assert new_vm.license_type == "Windows_Server"
    assert old_vm.license_type is None

    new_vm, old_vm = DescriptorRebuilder().rebuild(captured(license_type="Windows_Server"), LicenseMode.STANDARD)
    assert new_vm.license_type is None
    assert old_vm.license_type == "Windows_Server"


def test_descriptors_only_differ_in_license() -> None:
    new_vm, old_vm = DescriptorRebuilder().rebuild(captured(), LicenseMode.HYBRID)
    fields = [f for f in CreatableVm.__dataclass_fields__ if f != "license_type"]
    for name in fields:
        assert getattr(new_vm, name) == getattr(old_vm, name), name


def test_rebuild_attaches_existing_disks() -> None:
    state = captured(data_disk_count=3)
    new_vm, _ = DescriptorRebuilder().rebuild(state, LicenseMode.HYBRID)

    assert new_vm.create_option == ATTACH
    assert new_vm.os_type == "Windows"
    assert new_vm.os_disk.managed_disk_id == state.os_disk.managed_disk_id
    assert new_vm.os_disk.caching == "ReadWrite"
    assert [d.lun for d in new_vm.data_disks] == [0, 1, 2]
    assert [d.managed_disk_id for d in new_vm.data_disks] == [d.managed_disk_id for d in state.data_disks]
    assert [d.caching for d in new_vm.data_disks] == [d.caching for d in state.data_disks]
    assert [d.disk_size_gb for d in new_vm.data_disks] == [128, 256, 384]
    assert new_vm.network_interfaces == state.network_interfaces
    assert new_vm.location == "westeurope"
    assert new_vm.vm_size == "Standard_D2s_v3"
    assert new_vm.tags == {"env": "prod"}


def test_rebuild_unmanaged_disks() -> None:
    state = captured(managed=False)
    new_vm, _ = DescriptorRebuilder().rebuild(state, LicenseMode.HYBRID)
    assert new_vm.os_disk.managed_disk_id is None
    assert new_vm.os_disk.vhd_uri == "https://storage.blob.core.windows.net/vhds/web01-os.vhd"
    assert new_vm.os_disk.name == "web01-os"
    assert all(d.vhd_uri is not None for d in new_vm.data_disks)


def test_rebuild_keeps_original_data_disk_order() -> None:
    vm = make_vm()
    vm.data_disks.reverse()
    new_vm, _ = DescriptorRebuilder().rebuild(CapturedState.capture(vm, PowerState.RUNNING), LicenseMode.HYBRID)
    assert [d.lun for d in new_vm.data_disks] == [1, 0]


def test_attaching_os_disk_clears_os_type() -> None:
    builder = CreatableVmBuilder("web01", "westeurope").with_os_type("Windows")
    builder.attach_os_disk(DiskReference("web01-os", managed_disk_id="/disks/web01-os"))
    with pytest.raises(ValueError):
        builder.build()

    built = builder.with_os_type("Windows").build()
    assert built.os_type == "Windows"


def test_builder_rejects_duplicate_luns() -> None:
    builder = CreatableVmBuilder("web01", "westeurope")
    builder.attach_data_disk(DiskReference("a", managed_disk_id="/disks/a", lun=0))
    with pytest.raises(ValueError):
        builder.attach_data_disk(DiskReference("b", managed_disk_id="/disks/b", lun=0))
    with pytest.raises(ValueError):
        builder.attach_data_disk(DiskReference("c", managed_disk_id="/disks/c"))


def test_builder_requires_os_disk() -> None:
    with pytest.raises(ValueError):
        CreatableVmBuilder("web01", "westeurope").with_os_type("Windows").build()
