from dataclasses import dataclass
from typing import Optional

from dataclasses_json import dataclass_json

from vmlicense.dm.disk_reference import DELETE


@dataclass_json
@dataclass
class NetworkInterfaceReference:
    id: str
    primary: Optional[bool]
    delete_option: Optional[str]

    def __init__(self, id: str, primary: bool = None, delete_option: str = None):
        self.id = id
        self.primary = primary
        self.delete_option = delete_option

    @property
    def is_deleted_with_vm(self) -> bool:
        return self.delete_option is not None and self.delete_option.lower() == DELETE.lower()
