import json
import logging
import os
from datetime import datetime, timezone

from vmlicense.dm.vm import VM
from vmlicense.errors import BackupWriteError

logger = logging.getLogger(__name__)


class BackupWriter:
    backup_dir: str

    def __init__(self, backup_dir: str):
        self.backup_dir = backup_dir

    def write(self, vm: VM) -> str:
        path = self.get_path(vm.name)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "x") as f:
                f.write(json.dumps(vm.to_dict(encode_json=True), indent=2))
        except OSError as e:
            raise BackupWriteError("Could not write backup of VM {} to {}: {}".format(vm.name, path, e)) from e

        logger.info("Backed up VM %s to %s", vm.name, path)
        return path

    def get_path(self, vm_name: str) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        return os.path.join(self.backup_dir, vm_name, "{}-{}.json".format(vm_name, timestamp))


def read_backup(path: str) -> VM:
    with open(path, "r") as f:
        return VM.from_json(f.read())
