from enum import Enum

from taskbook.domain.enums import TaskKind

class TaskColor(Enum):
    RED = "[red]"
    BLUE = "[blue]"
    GREEN = "[green]"
    MAGENTA = "[magenta]"
    DIM = "[dim]"
    RESET = "[/]"

    def __str__(self):
        return self.value


KIND_COLORS = {
    TaskKind.TODO: TaskColor.BLUE,
    TaskKind.DEADLINE: TaskColor.RED,
    TaskKind.EVENT: TaskColor.MAGENTA,
}
