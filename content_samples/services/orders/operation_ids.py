"""Operation id generator for idempotent order mutations."""


class OperationIdGenerator:
    """
    Hands out operation ids "0", "1", "2", ... for one workflow run.

    Each instance keeps its own counter; ids are never reused by an instance.
    """

    def __init__(self):
        self._count = 0

    def next(self) -> str:
        operation_id = str(self._count)
        self._count += 1
        return operation_id

    @property
    def issued(self) -> int:
        """Number of ids handed out so far."""
        return self._count
