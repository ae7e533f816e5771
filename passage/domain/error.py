"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class StoreError(DomainError):
    """Persistence or query failure in the user store."""

    pass


class DuplicateUsernameError(StoreError):
    """Raised when a user is saved with a username that is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class AlreadyConnectedError(DomainError):
    """Raised when linking a provider the user is already connected with."""

    def __init__(self, user, provider: str):
        self.user = user
        self.provider = provider
        super().__init__("User is already connected using this provider")


class SessionError(DomainError):
    """Raised when a session cannot be established."""

    pass


class PreconditionError(DomainError):
    """Raised when an operation is called without its required inputs."""

    pass


class InvalidCredentialsError(DomainError):
    """Raised when local credentials do not match a user."""

    def __init__(self, message: str = "Unknown user or invalid password"):
        super().__init__(message)


class UnsupportedProviderError(DomainError):
    """Raised when no authentication strategy is registered for a provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")

