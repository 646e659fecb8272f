import argparse
import logging
import sys

from vmlicense.cloud.cloud_factory import CloudFactory
from vmlicense.config import RelicenseConfig
from vmlicense.dm.license_mode import LicenseMode
from vmlicense.errors import RelicenseError
from vmlicense.service.license_report_service import LicenseReportService
from vmlicense.service.relicense_service import RelicenseService
from vmlicense.storage.backup_writer import BackupWriter
from vmlicense.utils import get_confirmation, start_logging

EXIT_ABORTED = 1
EXIT_ROLLED_BACK = 10

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--subscription-id", help="Azure subscription ID (default: $AZURE_SUBSCRIPTION_ID)", type=str)
    common.add_argument("--resource-group", "-g", help="Only look at VMs in this resource group", type=str)
    common.add_argument("--backup-dir", help="Where VM backups are written (default: $VMLICENSE_BACKUP_DIR)",
                        type=str)
    common.add_argument("--log-file", help="Also write a debug log to this file", type=str)
    common.add_argument("--api-version", help="Compute API version to use", type=str)
    common.add_argument("--interactive-login", help="Log in through the browser", action="store_true")
    common.add_argument("--debug", "-d", help="Verbose console output", action="store_true")

    parser = argparse.ArgumentParser(description="Switch Windows VMs between the Azure Hybrid Benefit "
                                                 "and the standard license by recreating them.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", parents=[common], help="List VMs with their current license")

    set_parser = subparsers.add_parser("set", parents=[common], help="Change the license of a VM")
    set_parser.add_argument("vmName", help="Name of the virtual machine", type=str)
    set_parser.add_argument("licenseMode", help="Requested license", type=str,
                            choices=[mode.value for mode in LicenseMode])
    set_parser.add_argument("--force", "-f", help="Stop the VM if it is running", action="store_true")
    set_parser.add_argument("--yes", "-y", help="Do not ask for confirmation", action="store_true")

    return parser


def list_licenses(cloud, resource_group_name: str) -> int:
    try:
        rows = LicenseReportService(cloud).list_vms(resource_group_name)
    except RelicenseError as e:
        logger.error(e.message)
        return e.exit_code

    header = ("Name", "Resource Group", "Location", "OS", "License")
    table = [header] + [(r.name, r.resource_group, r.location, r.os_type, r.license_mode) for r in rows]
    widths = [max(len(str(row[i])) for row in table) for i in range(len(header))]
    for row in table:
        print("  ".join(str(value).ljust(width) for value, width in zip(row, widths)).rstrip())

    return 0


def set_license(cloud, config: RelicenseConfig, args) -> int:
    requested_mode = LicenseMode.parse(args.licenseMode)

    print(f"VM Name: {args.vmName}")
    print(f"Requested License: {requested_mode.value}")
    print(f"Subscription ID: {config.subscription_id}")
    if args.resource_group:
        print(f"Resource Group Name: {args.resource_group}")
    print(f"Backup Directory: {config.backup_dir}")
    print("The VM will be deleted and recreated from its disks.")

    if not args.yes and not get_confirmation():
        print("Exiting")
        return EXIT_ABORTED

    service = RelicenseService(cloud, BackupWriter(config.backup_dir))
    try:
        result = service.set_license(args.vmName, requested_mode, args.force, args.resource_group)
    except RelicenseError as e:
        logger.error(e.message)
        return e.exit_code

    if result.power_error is not None:
        logger.error("VM %s was recreated but its power state could not be restored: %s",
                     result.vm_name, result.power_error)
    if result.rolled_back:
        logger.error("VM %s could not be recreated with the %s license and was restored with its previous "
                     "license. Backup: %s", result.vm_name, requested_mode.value, result.backup_path)
        return EXIT_ROLLED_BACK

    logger.info("VM %s now uses the %s license. Backup: %s",
                result.vm_name, result.license_mode.value, result.backup_path)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = RelicenseConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    start_logging(config.debug, config.log_file)

    cloud = CloudFactory(config).get_cloud()
    if args.command == "list":
        return list_licenses(cloud, args.resource_group)

    return set_license(cloud, config, args)


if __name__ == "__main__":
    sys.exit(main())
