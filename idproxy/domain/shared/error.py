"""Error hierarchy for idproxy.

Error layers:
- IdProxyError: Base class for all idproxy errors
- DomainError: Authorization failures, rule violations, failed forwards
- InfrastructureError: System-level failures like storage or configuration issues

Every error carries a machine-readable ``code`` so relayers can tell a
refused signature apart from a failed forward without parsing messages.
"""


class IdProxyError(Exception):
    """Base class for all idproxy errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(IdProxyError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Identity, manager or target not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="validation_error")
        self.field = field


class AuthorizationError(DomainError):
    """Caller or signer lacks the required role or ownership."""


class InvalidSignatureError(AuthorizationError):
    """Signature is malformed or does not recover to any principal."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "invalid_signature")


class ForwardFailedError(DomainError):
    """The delegated call to the ultimate target did not succeed.

    Always raised with the underlying cause chained.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "forward_failed")


class TargetError(DomainError):
    """A target refused a call (the equivalent of a revert)."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(IdProxyError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
