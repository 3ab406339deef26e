# services/errors.py


class NotFoundError(ValueError):
    """A referenced task, leave, user or repository item does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class SourceTaskNotFoundError(NotFoundError):
    """A projected occurrence points at a task that has since disappeared."""

    def __init__(self, entity_id: str):
        super().__init__("Source task", entity_id)


class InvalidWindowError(ValueError):
    pass
