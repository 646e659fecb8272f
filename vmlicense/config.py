import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BACKUP_DIR = "vm backup store"


@dataclass
class RelicenseConfig:
    subscription_id: str
    backup_dir: str = DEFAULT_BACKUP_DIR
    log_file: Optional[str] = None
    debug: bool = False
    interactive_login: bool = False
    api_version: Optional[str] = None

    @classmethod
    def from_args(cls, args, environ=None) -> "RelicenseConfig":
        """
        Builds the run configuration. Command line flags win over environment variables.

        Args:
            args: parsed argparse namespace
            environ: environment mapping (default: os.environ)

        Returns:
            RelicenseConfig: the configuration for this run.
        """
        environ = os.environ if environ is None else environ

        subscription_id = args.subscription_id or environ.get("AZURE_SUBSCRIPTION_ID")
        if not subscription_id:
            raise ValueError("A subscription id is required: pass --subscription-id or set AZURE_SUBSCRIPTION_ID")

        return RelicenseConfig(
            subscription_id=subscription_id,
            backup_dir=args.backup_dir or environ.get("VMLICENSE_BACKUP_DIR") or DEFAULT_BACKUP_DIR,
            log_file=args.log_file or environ.get("VMLICENSE_LOG_FILE"),
            debug=args.debug,
            interactive_login=args.interactive_login,
            api_version=args.api_version or environ.get("VMLICENSE_COMPUTE_API_VERSION")
        )
