# udphrase/core/data_structures.py
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AnnotatedToken(BaseModel):
    """
    Токен, размеченный внешним анализатором.
    Ядро только читает эти поля и никогда не пересчитывает разметку.
    """
    model_config = ConfigDict(frozen=True)

    index: int  # 0-based, совпадает с позицией в предложении
    text: str
    pos: str  # UPOS (NOUN, PRON, VERB, ...)
    dependency_relation: str  # nsubj, amod, poss, ROOT
    morphology: Mapping[str, str] = Field(default_factory=dict, validate_default=True)  # только для чтения
    parent_index: Optional[int] = None  # None только у корня
    lemma: Optional[str] = None

    @field_validator("index")
    @classmethod
    def check_index(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"Token index must be non-negative, got {value}")
        return value

    @field_validator("pos")
    @classmethod
    def check_pos(cls, value: str) -> str:
        if not value:
            raise ValueError("Empty POS tag")
        return value.upper()

    @field_validator("morphology")
    @classmethod
    def freeze_morphology(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        # frozen=True не защищает содержимое словаря
        return MappingProxyType(dict(value))

    @property
    def is_root(self) -> bool:
        return self.parent_index is None

    def __str__(self):
        return self.text


class AnnotatedSentence(BaseModel):
    """
    Предложение как упорядоченный список токенов.
    Дерево (карта детей) не хранится, а строится в DependencyTree один раз на предложение.
    """
    model_config = ConfigDict(frozen=True)

    tokens: Tuple[AnnotatedToken, ...] = ()
    sent_id: Optional[str] = None
    text: Optional[str] = None

    @model_validator(mode="after")
    def check_positions(self):
        for position, token in enumerate(self.tokens):
            if token.index != position:
                raise ValueError(
                    f"Token '{token.text}' has index {token.index}, expected {position}"
                )
        return self

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index: int) -> AnnotatedToken:
        return self.tokens[index]

    def text_or_join(self) -> str:
        if self.text:
            return self.text
        return " ".join(t.text for t in self.tokens)


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Dependent(BaseModel):
    """Зависимое слово именной группы и его сторона относительно вершины."""
    model_config = ConfigDict(frozen=True)

    token: AnnotatedToken
    side: Side


class NominalPhraseRecord(BaseModel):
    """
    Именная группа: вершина-существительное и все его (транзитивные) зависимые.
    dependents отсортированы по исходному порядку, сторона - производный атрибут.
    """
    model_config = ConfigDict(frozen=True)

    phrase_text: str
    head: AnnotatedToken
    dependents: Tuple[Dependent, ...] = ()

    @property
    def left_dependents(self) -> List[AnnotatedToken]:
        return [d.token for d in self.dependents if d.side is Side.LEFT]

    @property
    def right_dependents(self) -> List[AnnotatedToken]:
        return [d.token for d in self.dependents if d.side is Side.RIGHT]

    @property
    def size(self) -> int:
        # Размер поддерева: вершина + зависимые
        return len(self.dependents) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phrase": self.phrase_text,
            "head": self.head.text,
            "head_index": self.head.index,
            "dependents": [
                {
                    "text": d.token.text,
                    "index": d.token.index,
                    "rel": d.token.dependency_relation,
                    "side": d.side.value,
                }
                for d in self.dependents
            ],
        }


class LexicalStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_count: int
    type_count: int
    ratio: float
    precision: int = 2

    @property
    def display_ratio(self) -> float:
        return round(self.ratio, self.precision)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_count": self.token_count,
            "type_count": self.type_count,
            "ttr": self.display_ratio,
        }
