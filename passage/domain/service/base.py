"""Base class for domain services."""


class Service:
    """Stateless domain logic operating on repositories.

    Services are created per request by the DI container.
    """

    pass
