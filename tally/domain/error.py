"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class DuplicateVoteError(BusinessRuleViolationError):
    """Raised when a voter has already voted on an item."""

    def __init__(self, item: str, voter: str, item_type: str | None):
        self.item = item
        self.voter = voter
        self.item_type = item_type
        super().__init__(f"User {voter} already voted on {item_type} {item}")
