class RelicenseError(Exception):
    exit_code: int = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CloudOperationError(RelicenseError):
    """Raised by a cloud implementation when the provider rejects or fails an operation."""
    exit_code = 12

    def __init__(self, operation: str, cause: Exception = None):
        super().__init__("{} failed: {}".format(operation, cause))
        self.operation = operation
        self.cause = cause


class NotFoundError(RelicenseError):
    exit_code = 3


class AmbiguousNameError(RelicenseError):
    exit_code = 3


class UnsupportedGuestError(RelicenseError):
    exit_code = 4


class NoOpError(RelicenseError):
    exit_code = 5


class ConfirmationRequiredError(RelicenseError):
    exit_code = 1


class BackupWriteError(RelicenseError):
    exit_code = 6


class StopFailedError(RelicenseError):
    exit_code = 7


class DeletionFailedError(RelicenseError):
    exit_code = 8


class ReconciliationFailedError(RelicenseError):
    exit_code = 9

    def __init__(self, message: str, backup_path: str):
        super().__init__("{} The original VM descriptor is saved at: {}".format(message, backup_path))
        self.backup_path = backup_path


class DiskRetentionError(RelicenseError):
    """Disks or NICs set to be deleted with the VM could not be switched to detach."""
    exit_code = 11


class RebuildError(RelicenseError):
    exit_code = 13
