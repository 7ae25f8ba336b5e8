"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic that works on repositories rather
    than on a single entity.
    """

    pass
