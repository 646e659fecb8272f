import json
import logging
from typing import List

from azure.identity import DefaultAzureCredential, InteractiveBrowserCredential
from azure.mgmt.compute.models import (
    VirtualMachine,
    HardwareProfile,
    StorageProfile,
    OSDisk,
    ManagedDiskParameters,
    VirtualHardDisk,
    NetworkProfile,
    SubResource,
    DiagnosticsProfile,
    BootDiagnostics,
    SecurityProfile,
    UefiSettings,
    Plan,
    VirtualMachineIdentity,
    UserAssignedIdentitiesValue,
    BillingProfile,
    AdditionalCapabilities,
    DataDisk as AzureDataDisk,
    NetworkInterfaceReference as AzureNetworkInterfaceReference
)

from vmlicense.cloud.azure.compute_resource_provider import ComputeResourceProvider
from vmlicense.cloud.cloud import ICloud
from vmlicense.dm.creatable_vm import CreatableVm
from vmlicense.dm.disk_reference import DiskReference, DETACH
from vmlicense.dm.network_interface import NetworkInterfaceReference
from vmlicense.dm.power_state import PowerState
from vmlicense.dm.vm import VM
from vmlicense.dm.vm_settings import PurchasePlan, VmSettings

logger = logging.getLogger(__name__)


def _enum_value(value):
    # the SDK hands back either plain strings or str enums
    return getattr(value, "value", value)


class Azure(ICloud):
    subscription_id: str
    crp: ComputeResourceProvider

    def __init__(self, subscription_id: str, interactive_login: bool = False, api_version: str = None):
        self.subscription_id = subscription_id
        if interactive_login:
            credentials = InteractiveBrowserCredential()
        else:
            credentials = DefaultAzureCredential()
        self.crp = ComputeResourceProvider(subscription_id, credentials, api_version)

    def list_vms(self, resource_group_name: str = None) -> List[VM]:
        return [Azure.to_vm(azure_vm) for azure_vm in self.crp.list_vms(resource_group_name)]

    def find_vms(self, vm_name: str, resource_group_name: str = None) -> List[VM]:
        # resource names are case insensitive on Azure
        return [Azure.to_vm(azure_vm) for azure_vm in self.crp.list_vms(resource_group_name)
                if azure_vm.name.lower() == vm_name.lower()]

    def get_power_state(self, resource_group_name: str, vm_name: str) -> PowerState:
        instance_view = self.crp.get_instance_view(resource_group_name, vm_name)
        for status in instance_view.statuses or []:
            if status.code is not None and status.code.startswith("PowerState/"):
                return PowerState.from_status_code(status.code)

        logger.warning("VM %s reports no power state, treating it as running", vm_name)
        return PowerState.RUNNING

    def stop_vm(self, resource_group_name: str, vm_name: str, stay_provisioned: bool):
        if stay_provisioned:
            self.crp.power_off_vm(resource_group_name, vm_name)
        else:
            self.crp.deallocate_vm(resource_group_name, vm_name)

    def keep_resources_on_delete(self, resource_group_name: str, vm_name: str):
        azure_vm = self.crp.get_vm(resource_group_name, vm_name)
        Azure.detach_on_delete(azure_vm)
        self.crp.put_vm(resource_group_name, azure_vm)

    def delete_vm(self, resource_group_name: str, vm_name: str):
        self.crp.delete_vm(resource_group_name, vm_name)

    def create_vm(self, resource_group_name: str, vm: CreatableVm) -> VM:
        azure_vm = self.crp.put_vm(resource_group_name, Azure.to_azure_vm(vm))

        return Azure.to_vm(azure_vm)

    @classmethod
    def detach_on_delete(cls, azure_vm: VirtualMachine):
        azure_vm.storage_profile.os_disk.delete_option = DETACH
        for azure_data_disk in azure_vm.storage_profile.data_disks or []:
            azure_data_disk.delete_option = DETACH
        if azure_vm.network_profile is not None:
            for azure_nic_reference in azure_vm.network_profile.network_interfaces or []:
                azure_nic_reference.delete_option = DETACH

    @classmethod
    def to_vm(cls, azure_vm: VirtualMachine) -> VM:
        storage_profile = azure_vm.storage_profile
        os_disk = Azure._to_disk_reference(storage_profile.os_disk)
        data_disks = [Azure._to_disk_reference(d) for d in storage_profile.data_disks or []]

        network_interfaces = []
        if azure_vm.network_profile is not None:
            for azure_nic_reference in azure_vm.network_profile.network_interfaces or []:
                network_interfaces.append(NetworkInterfaceReference(azure_nic_reference.id,
                                                                    azure_nic_reference.primary,
                                                                    _enum_value(azure_nic_reference.delete_option)))

        boot_diagnostics_storage_uri = None
        diagnostics_profile = azure_vm.diagnostics_profile
        if diagnostics_profile is not None and diagnostics_profile.boot_diagnostics is not None \
                and diagnostics_profile.boot_diagnostics.enabled:
            boot_diagnostics_storage_uri = diagnostics_profile.boot_diagnostics.storage_uri

        return VM(
            name=azure_vm.name,
            id=azure_vm.id,
            resource_group=ComputeResourceProvider.get_resource_group_name(azure_vm.id),
            location=azure_vm.location,
            vm_size=None if azure_vm.hardware_profile is None else _enum_value(azure_vm.hardware_profile.vm_size),
            os_type=_enum_value(storage_profile.os_disk.os_type),
            license_type=azure_vm.license_type or None,
            os_disk=os_disk,
            data_disks=data_disks,
            network_interfaces=network_interfaces,
            availability_set_id=None if azure_vm.availability_set is None else azure_vm.availability_set.id,
            zones=azure_vm.zones,
            tags=azure_vm.tags,
            boot_diagnostics_storage_uri=boot_diagnostics_storage_uri,
            settings=Azure._to_settings(azure_vm),
            # timestamps in the document are not JSON types
            provider_document=json.loads(json.dumps(azure_vm.as_dict(), default=str))
        )

    @classmethod
    def _to_disk_reference(cls, azure_disk) -> DiskReference:
        managed_disk_id = None if azure_disk.managed_disk is None else azure_disk.managed_disk.id
        vhd_uri = None if azure_disk.vhd is None else azure_disk.vhd.uri

        return DiskReference(
            name=azure_disk.name,
            managed_disk_id=managed_disk_id,
            vhd_uri=vhd_uri,
            caching=_enum_value(azure_disk.caching),
            disk_size_gb=azure_disk.disk_size_gb,
            lun=getattr(azure_disk, "lun", None),
            delete_option=_enum_value(azure_disk.delete_option)
        )

    @classmethod
    def _to_settings(cls, azure_vm: VirtualMachine) -> VmSettings:
        settings = VmSettings()
        settings.disk_controller_type = _enum_value(azure_vm.storage_profile.disk_controller_type)

        security_profile = azure_vm.security_profile
        if security_profile is not None:
            settings.security_type = _enum_value(security_profile.security_type)
            settings.encryption_at_host = security_profile.encryption_at_host
            if security_profile.uefi_settings is not None:
                settings.secure_boot_enabled = security_profile.uefi_settings.secure_boot_enabled
                settings.vtpm_enabled = security_profile.uefi_settings.v_tpm_enabled

        if azure_vm.plan is not None:
            settings.plan = PurchasePlan(azure_vm.plan.name, azure_vm.plan.publisher, azure_vm.plan.product,
                                         azure_vm.plan.promotion_code)

        if azure_vm.identity is not None:
            settings.identity_type = _enum_value(azure_vm.identity.type)
            settings.user_assigned_identity_ids = sorted((azure_vm.identity.user_assigned_identities or {}).keys())

        if azure_vm.proximity_placement_group is not None:
            settings.proximity_placement_group_id = azure_vm.proximity_placement_group.id

        settings.priority = _enum_value(azure_vm.priority)
        settings.eviction_policy = _enum_value(azure_vm.eviction_policy)
        if azure_vm.billing_profile is not None:
            settings.max_price = azure_vm.billing_profile.max_price

        if azure_vm.additional_capabilities is not None:
            settings.ultra_ssd_enabled = azure_vm.additional_capabilities.ultra_ssd_enabled
            settings.hibernation_enabled = azure_vm.additional_capabilities.hibernation_enabled

        return settings

    @classmethod
    def to_azure_vm(cls, vm: CreatableVm) -> VirtualMachine:
        azure_vm = VirtualMachine(
            location=vm.location,
            tags=vm.tags,
            zones=vm.zones,
            license_type=vm.license_type,
            hardware_profile=HardwareProfile(vm_size=vm.vm_size)
        )
        azure_vm.name = vm.name

        azure_vm.storage_profile = StorageProfile()
        azure_vm.storage_profile.os_disk = OSDisk(
            create_option=vm.create_option,
            name=vm.os_disk.name,
            caching=vm.os_disk.caching,
            delete_option=vm.os_disk.delete_option,
            os_type=vm.os_type
        )
        Azure._set_disk_source(azure_vm.storage_profile.os_disk, vm.os_disk)

        azure_vm.storage_profile.data_disks = []
        for disk in vm.data_disks:
            data_disk = AzureDataDisk(
                lun=disk.lun,
                create_option=vm.create_option,
                name=disk.name,
                caching=disk.caching,
                disk_size_gb=disk.disk_size_gb,
                delete_option=disk.delete_option
            )
            Azure._set_disk_source(data_disk, disk)
            azure_vm.storage_profile.data_disks.append(data_disk)

        azure_vm.network_profile = NetworkProfile()
        azure_vm.network_profile.network_interfaces = []
        for nic in vm.network_interfaces:
            azure_vm.network_profile.network_interfaces.append(
                AzureNetworkInterfaceReference(id=nic.id, primary=nic.primary, delete_option=nic.delete_option))

        if vm.availability_set_id is not None:
            azure_vm.availability_set = SubResource(id=vm.availability_set_id)

        if vm.boot_diagnostics_storage_uri is not None:
            azure_vm.diagnostics_profile = DiagnosticsProfile(
                boot_diagnostics=BootDiagnostics(enabled=True, storage_uri=vm.boot_diagnostics_storage_uri))

        Azure._apply_settings(azure_vm, vm.settings)

        return azure_vm

    @classmethod
    def _apply_settings(cls, azure_vm: VirtualMachine, settings: VmSettings):
        if settings.disk_controller_type is not None:
            azure_vm.storage_profile.disk_controller_type = settings.disk_controller_type

        # a trusted launch OS disk only attaches to a VM with the same security type
        if settings.security_type is not None or settings.encryption_at_host is not None:
            azure_vm.security_profile = SecurityProfile(
                security_type=settings.security_type,
                encryption_at_host=settings.encryption_at_host
            )
            if settings.secure_boot_enabled is not None or settings.vtpm_enabled is not None:
                azure_vm.security_profile.uefi_settings = UefiSettings(
                    secure_boot_enabled=settings.secure_boot_enabled,
                    v_tpm_enabled=settings.vtpm_enabled
                )

        # disks made from marketplace images need their plan
        if settings.plan is not None:
            azure_vm.plan = Plan(
                name=settings.plan.name,
                publisher=settings.plan.publisher,
                product=settings.plan.product,
                promotion_code=settings.plan.promotion_code
            )

        if settings.identity_type is not None:
            azure_vm.identity = VirtualMachineIdentity(type=settings.identity_type)
            if settings.user_assigned_identity_ids:
                azure_vm.identity.user_assigned_identities = {
                    identity_id: UserAssignedIdentitiesValue() for identity_id in settings.user_assigned_identity_ids
                }

        if settings.proximity_placement_group_id is not None:
            azure_vm.proximity_placement_group = SubResource(id=settings.proximity_placement_group_id)

        if settings.priority is not None:
            azure_vm.priority = settings.priority
        if settings.eviction_policy is not None:
            azure_vm.eviction_policy = settings.eviction_policy
        if settings.max_price is not None:
            azure_vm.billing_profile = BillingProfile(max_price=settings.max_price)

        if settings.ultra_ssd_enabled is not None or settings.hibernation_enabled is not None:
            azure_vm.additional_capabilities = AdditionalCapabilities(
                ultra_ssd_enabled=settings.ultra_ssd_enabled,
                hibernation_enabled=settings.hibernation_enabled
            )

    @classmethod
    def _set_disk_source(cls, azure_disk, disk: DiskReference):
        if disk.is_managed:
            azure_disk.managed_disk = ManagedDiskParameters(id=disk.managed_disk_id)
        else:
            azure_disk.vhd = VirtualHardDisk(uri=disk.vhd_uri)
