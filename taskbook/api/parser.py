from taskbook.domain.dates import parse_date
from taskbook.domain.errors import ParseError
from taskbook.services.commands import Instruction, UNRECOGNIZED


### COMMENTS
# ==========================================================
# Parser linii trybu interaktywnego (`taskbook shell`).
# ==========================================================
#   todo <nazwa>
#   deadline <nazwa> /by <yyyy-MM-dd>
#   event <nazwa> /from <yyyy-MM-dd> /to <yyyy-MM-dd>
#   mark <N> | unmark <N> | delete <N>
#   list | list <yyyy-MM-dd>
#   find <slowo>
#   bye | exit
# Nieznane słowo → Instruction(UNRECOGNIZED, (linia,)); odrzuca je serwis.

EXIT_WORDS = {"bye", "exit", "quit"}


def _split_flag(text: str, flag: str, usage: str) -> tuple[str, str]:
    head, sep, tail = text.partition(f" {flag} ")
    if not sep:
        raise ParseError(text, f"brak '{flag}'; uzycie: {usage}")
    return head.strip(), tail.strip()


def _position(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ParseError(text, "oczekiwano numeru zadania")


def parse_line(line: str) -> Instruction:
    """Zamienia linię wpisaną przez użytkownika na `Instruction`.

    :raises ParseError: Gdy znane polecenie ma złe argumenty (np. zła data, brak numeru).
    """
    word, _, rest = line.strip().partition(" ")
    word = word.lower()
    rest = rest.strip()

    match word:
        case "todo":
            return Instruction("add-todo", (rest,))
        case "deadline":
            name, due = _split_flag(f" {rest} ", "/by", "deadline <nazwa> /by <data>")
            return Instruction("add-deadline", (name, parse_date(due)))
        case "event":
            name, span = _split_flag(f" {rest} ", "/from", "event <nazwa> /from <data> /to <data>")
            start, end = _split_flag(f" {span} ", "/to", "event <nazwa> /from <data> /to <data>")
            return Instruction("add-event", (name, parse_date(start), parse_date(end)))
        case "mark" | "unmark" | "delete":
            return Instruction(word, (_position(rest),))
        case "list":
            if rest:
                return Instruction("list-on", (parse_date(rest),))
            return Instruction("list")
        case "find":
            return Instruction("find", (rest,))
        case _ if word in EXIT_WORDS:
            return Instruction("exit")
        case _:
            return Instruction(UNRECOGNIZED, (line.strip(),))
