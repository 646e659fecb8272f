from enum import Enum


class PowerState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    DEALLOCATED = "deallocated"

    @property
    def is_running(self) -> bool:
        return self is PowerState.RUNNING

    @classmethod
    def from_status_code(cls, code: str) -> "PowerState":
        # PowerState/<state>; transitional states still need a stop
        state = code.split("/")[-1].lower()
        if state == "stopped":
            return PowerState.STOPPED
        if state == "deallocated":
            return PowerState.DEALLOCATED
        return PowerState.RUNNING
