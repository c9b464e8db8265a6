"""Error Hierarchy: typed, categorized exceptions for every ledger failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Guard failures are terminal for the current call; the core never retries
    - Domain errors (400-level) describe a rejected call; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ScavengerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    address: str | None = None
    waste_id: int | None = None
    debug_info: dict[str, Any] | None = None


class ScavengerError(Exception):
    """Base exception for all Scavenger ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "address": self.context.address,
                    "waste_id": self.context.waste_id,
                },
            }
        }


# ─── Registry Errors ────────────────────────────────────────────

class AlreadyRegisteredError(ScavengerError):
    """Registration attempted for an address that already has a record."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Participant '{address}' is already registered",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context or ErrorContext(address=address), 409,
        )
        self.address = address


class NotRegisteredError(ScavengerError):
    """Mutation attempted on a participant that does not exist."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Participant '{address}' is not registered",
            "NOT_REGISTERED", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context or ErrorContext(address=address), 404,
        )
        self.address = address


class UnauthorizedError(ScavengerError):
    """Caller is not authenticated as the address the call acts for."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Caller is not authenticated as '{address}'",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context or ErrorContext(address=address), 401,
        )
        self.address = address


# ─── Transfer Guard Errors ──────────────────────────────────────

class SenderNotRegisteredError(ScavengerError):
    """Transfer sender is not a registered participant."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Sender '{address}' is not a registered participant",
            "SENDER_NOT_REGISTERED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context or ErrorContext(address=address), 400,
        )
        self.address = address


class ReceiverNotRegisteredError(ScavengerError):
    """Transfer receiver is not a registered participant."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Receiver '{address}' is not a registered participant",
            "RECEIVER_NOT_REGISTERED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context or ErrorContext(address=address), 400,
        )
        self.address = address


class MaterialNotFoundError(ScavengerError):
    """Referenced waste id has no material record."""
    def __init__(self, waste_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Material {waste_id} not found",
            "MATERIAL_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context or ErrorContext(waste_id=waste_id), 404,
        )
        self.waste_id = waste_id


class NotOwnerError(ScavengerError):
    """Sender is not the material's current owner."""
    def __init__(
        self, waste_id: int, address: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"'{address}' does not own material {waste_id}",
            "NOT_OWNER", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR,
            context or ErrorContext(address=address, waste_id=waste_id), 403,
        )
        self.waste_id = waste_id
        self.address = address


class InvalidMaterialError(ScavengerError):
    """Material submission carries an unusable attribute."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_MATERIAL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ScavengerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class CorruptRecordError(ScavengerError):
    """A stored payload could not be decoded into its record type."""
    def __init__(self, key: tuple[str, str], reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Stored record {key[0]}/{key[1]} is unreadable: {reason}",
            "CORRUPT_RECORD", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
            context or ErrorContext(debug_info={"namespace": key[0], "key": key[1]}),
            500,
        )
        self.key = key
