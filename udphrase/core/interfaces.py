# udphrase/core/interfaces.py
from abc import ABC, abstractmethod
from typing import List
from .data_structures import AnnotatedSentence


class BaseAnnotator(ABC):
    @abstractmethod
    def annotate(self, text: str) -> List[AnnotatedSentence]:
        """
        Принимает сырой текст.
        Возвращает список размеченных предложений (POS, зависимости, морфология).
        Сегментацией на предложения занимается сам анализатор.
        """
        pass
