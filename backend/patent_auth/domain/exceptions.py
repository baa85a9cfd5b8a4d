"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ValidationError(Exception):
    """Raised when an edit request carries values the domain rejects."""


class AuthenticationError(Exception):
    """Raised when an actor cannot be admitted."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown account or credential mismatch."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class RoleMismatchError(AuthenticationError):
    """The account exists but its role differs from the one requested."""

    def __init__(self, required_role: str, actual_role: str):
        self.required_role = required_role
        self.actual_role = actual_role
        super().__init__(f"Account role {actual_role} cannot act as {required_role}")


class AffordabilityError(Exception):
    """Raised when a credit balance is below the required cost."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient credits: required {required}, available {available}")


class ExportFailure(Exception):
    """Raised when a certificate could not be rendered or exported."""


class StoreCorruptedError(Exception):
    """The persisted document cannot be decoded. Not recoverable."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored document '{key}' is corrupted: {reason}")


class IntegrityWarning(UserWarning):
    """Several certificates share one identifier."""
