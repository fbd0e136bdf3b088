# udphrase/statistics.py
import logging
import unicodedata
from collections import Counter
from typing import Iterable, List, Sequence, Tuple, Union

from udphrase.config import DISPLAY_PRECISION, PUNCT_POS
from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken, LexicalStats
from udphrase.exceptions import DivisionError

logger = logging.getLogger(__name__)

RawToken = Union[str, AnnotatedToken]


def is_punctuation(text: str) -> bool:
    """Строка целиком из символов Unicode-категории P* (. , — « » и т.п.)."""
    return bool(text) and all(unicodedata.category(ch).startswith("P") for ch in text)


def normalize(raw_tokens: Iterable[RawToken], punct_pos: Iterable[str] = PUNCT_POS) -> List[str]:
    """
    Готовит поток токенов для лексической статистики:
    1. Выбрасывает пунктуацию и пробельные токены.
    2. Приводит остальное к нижнему регистру.

    Размеченные токены классифицируются по UPOS (PUNCT, SPACE),
    голые строки - по категориям Unicode.
    """
    punct_pos = set(punct_pos)
    result = []

    for token in raw_tokens:
        if isinstance(token, AnnotatedToken):
            text = token.text
            if token.pos in punct_pos:
                continue
        else:
            text = token
            if is_punctuation(text.strip()):
                continue

        if not text.strip():
            continue

        result.append(text.lower())

    return result


def type_token_ratio(tokens: Sequence[str]) -> float:
    """
    TTR = число уникальных словоформ / общее число словоформ.
    Регистр уже нормализован в normalize().

    Raises:
        DivisionError: если поток пуст.
    """
    token_count = len(tokens)
    if token_count == 0:
        raise DivisionError("Type/token ratio is undefined for an empty token stream")
    return len(set(tokens)) / token_count


def lexical_stats(tokens: Sequence[str], precision: int = DISPLAY_PRECISION) -> LexicalStats:
    ratio = type_token_ratio(tokens)
    stats = LexicalStats(
        token_count=len(tokens),
        type_count=len(set(tokens)),
        ratio=ratio,
        precision=precision,
    )
    logger.debug(f"Lexical stats: tokens={stats.token_count}, types={stats.type_count}, ttr={ratio:.4f}")
    return stats


def most_common(tokens: Iterable[str], n: int = 10) -> List[Tuple[str, int]]:
    return Counter(tokens).most_common(n)


def pos_distribution(sentences: Iterable[AnnotatedSentence]) -> Counter:
    """Частоты UPOS по всем предложениям."""
    counter = Counter()
    for sentence in sentences:
        counter.update(t.pos for t in sentence.tokens)
    return counter
