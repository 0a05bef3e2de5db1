### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Model (Task) i kolekcja:
#     * walidują dane i pozycje, rzucają TaskValidationError / TaskIndexError
#
# - Adaptery trwałości:
#     * mapują błędy techniczne (OSError, SQLAlchemyError) na PersistenceError
#     * uszkodzone linie przy wczytywaniu to PersistenceWarning (wartość, nie wyjątek)
#
# - Serwis (TaskService.dispatch):
#     * łapie DomainError i zamienia go na komunikat dla użytkownika
#     * nic z domeny nie wychodzi poza tę granicę


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio — używaj klas pochodnych.
    """

class TaskValidationError(DomainError):
    """Rzucany, gdy dane zadania nie spełniają reguł modelu.
    Przykłady:
    - nazwa jest pusta,
    - brakuje daty wymaganej dla danego typu zadania,
    - wydarzenie kończy się przed początkiem.
    Zawiera nazwę pola (`field`) i komunikat (`message`).
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class TaskIndexError(DomainError, IndexError):
    """Rzucany, gdy pozycja (1-based) wykracza poza zakres `[1, size]`."""
    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(self.__str__())
    def __str__(self):
        if self.size == 0:
            return f"Brak zadania nr {self.position}: lista jest pusta."
        return f"Brak zadania nr {self.position}: dozwolony zakres to 1..{self.size}."


class ParseError(DomainError):
    """Rzucany, gdy tekst (data, rekord, argumenty instrukcji) nie daje się sparsować."""
    def __init__(self, text: str, message: str):
        self.text = text
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Nie można sparsować '{self.text}': {self.message}"


class UnknownCommandError(DomainError):
    """Rzucany dla nierozpoznanej instrukcji; nic nie zostaje wykonane."""
    def __init__(self, action: str):
        self.action = action
        super().__init__(self.__str__())
    def __str__(self):
        if not self.action:
            return "Pusta instrukcja."
        return f"Nieznana instrukcja: '{self.action}'."


class PersistenceError(DomainError):
    """Rzucany, gdy nie da się odczytać lub zapisać magazynu zadań.
    Stan w pamięci pozostaje poprawny i można z niego dalej korzystać.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd zapisu/odczytu: {self.message}"
