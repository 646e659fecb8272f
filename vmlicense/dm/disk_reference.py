from dataclasses import dataclass
from typing import Optional

from dataclasses_json import dataclass_json

DELETE = "Delete"
DETACH = "Detach"


@dataclass_json
@dataclass
class DiskReference:
    name: str
    managed_disk_id: Optional[str]
    vhd_uri: Optional[str]
    caching: Optional[str]
    disk_size_gb: Optional[int]
    lun: Optional[int]
    delete_option: Optional[str]

    def __init__(self, name: str, managed_disk_id: str = None, vhd_uri: str = None, caching: str = None,
                 disk_size_gb: int = None, lun: int = None, delete_option: str = None):
        self.name = name
        self.managed_disk_id = managed_disk_id
        self.vhd_uri = vhd_uri
        self.caching = caching
        self.disk_size_gb = disk_size_gb
        self.lun = lun
        self.delete_option = delete_option

    @property
    def is_managed(self) -> bool:
        return self.managed_disk_id is not None

    @property
    def is_deleted_with_vm(self) -> bool:
        return self.delete_option is not None and self.delete_option.lower() == DELETE.lower()
