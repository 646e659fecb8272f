from enum import Enum
from typing import Optional

HYBRID_LICENSE_MARKER = "Windows_Server"


class LicenseMode(Enum):
    HYBRID = "Hybrid"
    STANDARD = "Standard"

    @property
    def marker(self) -> Optional[str]:
        if self is LicenseMode.HYBRID:
            return HYBRID_LICENSE_MARKER
        return None

    @classmethod
    def from_marker(cls, license_type: Optional[str]) -> Optional["LicenseMode"]:
        """Returns None for markers this tool does not manage, e.g. Windows_Client."""
        if license_type is None or license_type.strip() == "" or license_type.lower() == "none":
            return LicenseMode.STANDARD
        if license_type.lower() == HYBRID_LICENSE_MARKER.lower():
            return LicenseMode.HYBRID
        return None

    @classmethod
    def parse(cls, value: str) -> "LicenseMode":
        for mode in LicenseMode:
            if mode.value.lower() == value.strip().lower():
                return mode
        raise ValueError("Unknown license mode: {}. Expected one of: {}"
                         .format(value, ", ".join(m.value for m in LicenseMode)))
