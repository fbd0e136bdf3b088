# udphrase/exceptions.py
from typing import Optional, Sequence


class UDPhraseError(Exception):
    """Базовое исключение пакета."""


class StructuralError(UDPhraseError):
    """
    Дерево зависимостей предложения некорректно: цикл, HEAD вне диапазона,
    ноль или несколько корней, недостижимые токены.
    Фатально для конкретного предложения, но не для всего корпуса.
    """

    def __init__(self, message: str, sent_id: Optional[str] = None, indices: Sequence[int] = ()):
        self.sent_id = sent_id
        self.indices = tuple(indices)
        if sent_id is not None:
            message = f"[{sent_id}] {message}"
        super().__init__(message)


class ValidationError(UDPhraseError, ValueError):
    """Некорректный аргумент операции (индекс узла вне [0, n), битый предикат)."""


class DivisionError(UDPhraseError, ZeroDivisionError):
    """Статистика запрошена для пустого потока токенов."""
