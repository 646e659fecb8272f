import logging
from typing import List

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.compute.models import VirtualMachine, VirtualMachineInstanceView

from vmlicense.errors import CloudOperationError

logger = logging.getLogger(__name__)


class ComputeResourceProvider:
    subscription_id: str
    compute_client: ComputeManagementClient

    def __init__(self, subscription_id: str, credentials: TokenCredential, api_version: str = None):
        self.subscription_id = subscription_id
        kwargs = {} if api_version is None else {"api_version": api_version}
        self.compute_client = ComputeManagementClient(credentials, subscription_id, **kwargs)

    def list_vms(self, resource_group_name: str = None) -> List[VirtualMachine]:
        try:
            if resource_group_name is None:
                logger.info("Listing VMs in subscription %s", self.subscription_id)
                return list(self.compute_client.virtual_machines.list_all())
            logger.info("Listing VMs in resource group %s", resource_group_name)
            return list(self.compute_client.virtual_machines.list(resource_group_name))
        except AzureError as e:
            raise CloudOperationError("List VMs", e) from e

    def get_vm(self, resource_group_name: str, vm_name: str) -> VirtualMachine:
        logger.info("GETting VM: %s", self.get_vm_id(resource_group_name, vm_name))
        try:
            return self.compute_client.virtual_machines.get(resource_group_name, vm_name)
        except AzureError as e:
            raise CloudOperationError("Get VM {}".format(vm_name), e) from e

    def get_instance_view(self, resource_group_name: str, vm_name: str) -> VirtualMachineInstanceView:
        logger.debug("GETting instance view: %s", self.get_vm_id(resource_group_name, vm_name))
        try:
            return self.compute_client.virtual_machines.instance_view(resource_group_name, vm_name)
        except AzureError as e:
            raise CloudOperationError("Get instance view of {}".format(vm_name), e) from e

    def power_off_vm(self, resource_group_name: str, vm_name: str):
        logger.info("Stopping VM (stay provisioned): %s", self.get_vm_id(resource_group_name, vm_name))
        self._wait("Stop VM {}".format(vm_name),
                   lambda: self.compute_client.virtual_machines.begin_power_off(resource_group_name, vm_name))

    def deallocate_vm(self, resource_group_name: str, vm_name: str):
        logger.info("Deallocating VM: %s", self.get_vm_id(resource_group_name, vm_name))
        self._wait("Deallocate VM {}".format(vm_name),
                   lambda: self.compute_client.virtual_machines.begin_deallocate(resource_group_name, vm_name))

    def delete_vm(self, resource_group_name: str, vm_name: str):
        logger.info("DELETEing VM: %s", self.get_vm_id(resource_group_name, vm_name))
        self._wait("Delete VM {}".format(vm_name),
                   lambda: self.compute_client.virtual_machines.begin_delete(resource_group_name, vm_name))

    def put_vm(self, resource_group_name: str, vm: VirtualMachine) -> VirtualMachine:
        logger.info("PUTting VM: %s", self.get_vm_id(resource_group_name, vm.name))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("VM body: %s", vm.as_dict())
        result = self._wait("Create VM {}".format(vm.name),
                            lambda: self.compute_client.virtual_machines.begin_create_or_update(
                                resource_group_name, vm.name, vm))
        logger.info("VM PUT Done")

        return result

    @classmethod
    def _wait(cls, operation: str, begin):
        try:
            poller = begin()
            return poller.result()
        except AzureError as e:
            raise CloudOperationError(operation, e) from e

    def get_vm_id(self, resource_group_name: str, vm_name: str) -> str:
        return '/subscriptions/{}/resourceGroups/{}/providers/Microsoft.Compute/virtualMachines/{}'.format(
            self.subscription_id,
            resource_group_name,
            vm_name
        )

    @classmethod
    def get_resource_group_name(cls, resource_id: str) -> str:
        parts = resource_id.split('/')
        resource_group_name = parts[4]

        return resource_group_name
