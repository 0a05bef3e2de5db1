from enum import Enum

class TaskKind(str, Enum):
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    def __str__(self):
        return self.value

    @property
    def tag(self) -> str:
        """Znacznik typu w widoku listy, np. `[T]`."""
        return f"[{self.value}]"
