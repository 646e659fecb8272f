from dataclasses import dataclass
from typing import List

from vmlicense.cloud.cloud import ICloud

NOT_APPLICABLE = "N/A"


@dataclass
class LicenseReportRow:
    name: str
    resource_group: str
    location: str
    os_type: str
    license_mode: str


class LicenseReportService:
    cloud: ICloud

    def __init__(self, cloud: ICloud):
        self.cloud = cloud

    def list_vms(self, resource_group_name: str = None) -> List[LicenseReportRow]:
        rows = []
        for vm in self.cloud.list_vms(resource_group_name):
            if not vm.is_supported_guest:
                license_mode = NOT_APPLICABLE
            elif vm.license_mode is None:
                # a marker this tool does not manage, shown as is
                license_mode = vm.license_type
            else:
                license_mode = vm.license_mode.value
            rows.append(LicenseReportRow(vm.name, vm.resource_group, vm.location, vm.os_type or NOT_APPLICABLE,
                                         license_mode))

        return sorted(rows, key=lambda row: (row.resource_group.lower(), row.name.lower()))
