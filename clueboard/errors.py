class ClueboardError(Exception):
    """Base class for every error raised by clueboard."""


class InvalidCell(ClueboardError):
    def __init__(self, position, reason: str = "not a letter cell"):
        self.position = position
        super().__init__(f"Invalid cell {position}: {reason}")


class UnknownClue(ClueboardError):
    def __init__(self, clue_id: str):
        self.clue_id = clue_id
        super().__init__(f"Unknown clue: {clue_id!r}")


class UnknownLevel(ClueboardError):
    def __init__(self, level_id: str):
        self.level_id = level_id
        super().__init__(f"Unknown level: {level_id!r}")


class StorageUnavailable(ClueboardError):
    """Raised by a key-value store when the underlying I/O fails."""


class CatalogError(ClueboardError):
    """Raised when a level record is malformed."""


class NoActiveLevel(ClueboardError):
    def __init__(self):
        super().__init__("No level is loaded; select a level first")
