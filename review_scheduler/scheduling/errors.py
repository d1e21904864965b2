class SchedulerError(Exception):
    pass


class DuplicateItemError(SchedulerError):
    """Raised when a fact id is registered twice for the same learner."""

    def __init__(self, item_id: str):
        super().__init__(f'Review item already exists: {item_id}')
        self.item_id = item_id


class ItemNotFoundError(SchedulerError):
    def __init__(self, item_id: str):
        super().__init__(f'Review item not found: {item_id}')
        self.item_id = item_id


class InvalidQualityError(SchedulerError, ValueError):
    def __init__(self, quality):
        super().__init__(f'Quality rating must be an integer in [0, 5], got {quality!r}')
        self.quality = quality


class PersistenceFailureError(SchedulerError):
    """Raised when the durable store rejects a write; in-memory state is left unchanged."""
