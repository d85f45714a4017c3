from enum import Enum


class CallType(str, Enum):
    """EVM call frame kinds reported by call tracers."""

    CALL = "call"
    STATICCALL = "staticcall"
    DELEGATECALL = "delegatecall"
    CREATE = "create"
    CREATE2 = "create2"

    @classmethod
    def from_raw(cls, raw: object) -> "CallType":
        """Lenient parse: unknown or missing tags become CALL."""
        if isinstance(raw, str):
            try:
                return cls(raw.lower())
            except ValueError:
                pass
        return cls.CALL
