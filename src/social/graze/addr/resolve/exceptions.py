class InvalidIdentifierException(ValueError):
    """
    Raised when the identifier to resolve is missing or empty.

    This is a caller error and is reported before any strategy runs.
    """

    @staticmethod
    def missing() -> "InvalidIdentifierException":
        return InvalidIdentifierException("Address parameter is required")


class ResolutionException(Exception):
    """
    Raised when an upstream service answers with a body the resolver cannot use.

    The static constructors below describe the specific failure so the message can be passed on to
    the caller as the failure details.
    """

    @staticmethod
    def missing_field(service: str, field: str) -> "ResolutionException":
        """The upstream body parsed but lacks the field holding the address."""
        return ResolutionException(
            f"error-resolve-1000 {service} response missing {field}"
        )

    @staticmethod
    def unexpected_body(service: str) -> "ResolutionException":
        """The upstream body parsed but is not a JSON object."""
        return ResolutionException(
            f"error-resolve-1001 {service} response is not an object"
        )

    @staticmethod
    def upstream_error(service: str, message: str) -> "ResolutionException":
        """The upstream reported an error in place of an address."""
        return ResolutionException(f"error-resolve-1002 {service} error: {message}")

    @staticmethod
    def exhausted() -> "ResolutionException":
        """Every strategy was skipped or declined."""
        return ResolutionException(
            "error-resolve-1003 no strategy produced an address"
        )
