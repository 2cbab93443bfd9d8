"""Exception hierarchy for schemabind.

Configuration errors are fatal for the unit (or the run) they occur in.
Naming collisions are never errors, and empty-shape statements are reported
through error markers on the synthesized ``Statement`` instead of raising.
"""

from typing import Dict, Optional


class SchemaBindError(Exception):
    """Base class for every error raised by schemabind."""


class ConfigurationError(SchemaBindError):
    """Invalid or unsupported generation configuration."""


class UnsupportedDialectError(ConfigurationError):
    """Raised when a dialect name is not one of the supported dialects."""

    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(f"unknown dialect {dialect!r}")


class UnsupportedOracleTypeError(ConfigurationError):
    """Raised when the oracle driver variant is not recognised."""

    def __init__(self, oracle_type: str):
        self.oracle_type = oracle_type
        super().__init__(f"unsupported oracle type {oracle_type!r}")


class UnknownNativeTypeError(ConfigurationError):
    """Raised when a native SQL type has no mapping for the dialect."""

    def __init__(self, native_type: str, dialect: str):
        self.native_type = native_type
        self.dialect = dialect
        super().__init__(
            f"unknown native type {native_type!r} for dialect {dialect!r}"
        )


class MissingOutputTargetError(ConfigurationError):
    """Raised when generation would produce an unnamed output file."""

    def __init__(self, message: str = "in query exec mode, --single must be provided"):
        super().__init__(message)


class UnsupportedOperationError(SchemaBindError):
    """Raised for an (operation, unit, dialect) combination with no synthesis rule."""

    def __init__(self, operation: str, unit: str, dialect: str):
        self.operation = operation
        self.unit = unit
        self.dialect = dialect
        super().__init__(
            f"operation {operation!r} is not supported for {unit} on {dialect!r}"
        )


class SchemaModelError(SchemaBindError):
    """Raised when the schema model has an invalid shape."""


class GenerationFailure:
    """A per-unit failure collected by the generation driver."""

    def __init__(self, unit: str, error: SchemaBindError, kind: Optional[str] = None):
        self.unit = unit
        self.error = error
        self.kind = kind or "unit"

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"GenerationFailure(unit={self.unit!r}, error={self.error!r})"

    def to_dict(self) -> Dict[str, str]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self.error).__name__,
            "unit": self.unit,
            "kind": self.kind,
            "message": str(self.error),
        }


__all__ = [
    "SchemaBindError",
    "ConfigurationError",
    "UnsupportedDialectError",
    "UnsupportedOracleTypeError",
    "UnknownNativeTypeError",
    "MissingOutputTargetError",
    "UnsupportedOperationError",
    "SchemaModelError",
    "GenerationFailure",
]
