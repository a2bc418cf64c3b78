"""Exception types raised by the project identity core."""


class PomCliError(Exception):
    """Base class for pomcli errors."""


class InvalidSpecError(PomCliError, ValueError):
    """Raised when an identity spec does not have 1, 2 or 3 segments."""

    def __init__(self, spec: str):
        super().__init__(f"Invalid spec: {spec}")
        self.spec = spec


class MissingIdentityError(PomCliError):
    """Raised when a new descriptor is requested without any identity."""

    def __init__(self, pom_path):
        super().__init__(
            f"No project id given and no artifactId could be read from {pom_path}"
        )
        self.pom_path = pom_path


class ToolchainDetectionError(PomCliError):
    """Raised when the Java version cannot be determined."""
