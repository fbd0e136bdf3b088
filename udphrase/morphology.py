# udphrase/morphology.py
from typing import Dict, List, Optional, Sequence, Tuple

from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken
from udphrase.exceptions import ValidationError

Predicate = Tuple[str, str]


def parse_feats(feats: Optional[str]) -> Dict[str, str]:
    """
    Разбор колонки FEATS формата UD: "Case=Nom|Number=Sing" -> {"Case": "Nom", "Number": "Sing"}.
    "_" и пустая строка дают пустой словарь.
    """
    if not feats or feats == "_":
        return {}

    result = {}
    for pair in feats.split("|"):
        if not pair:
            continue
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValidationError(f"Malformed feature '{pair}' in '{feats}'")
        result[name] = value
    return result


def parse_predicates(query: str) -> List[Predicate]:
    """
    Строка запроса для CLI: "Number=Sing|PronType=Prs" (допускается и запятая).
    Порядок пар сохраняется.
    """
    predicates = []
    for chunk in query.replace(",", "|").split("|"):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, sep, value = chunk.partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            raise ValidationError(f"Predicate must look like Name=Value, got '{chunk}'")
        predicates.append((name, value))
    return predicates


def matches(token: AnnotatedToken, predicates: Sequence[Predicate]) -> bool:
    """
    Логическое И по всем парам (признак, значение).
    Сравнение строгое и регистрозависимое; пустой список предикатов истинен всегда.
    От части речи не зависит.
    """
    morphology = token.morphology
    return all(morphology.get(name) == value for name, value in predicates)


def filter_tokens(sentence: AnnotatedSentence, predicates: Sequence[Predicate]) -> List[AnnotatedToken]:
    return [t for t in sentence.tokens if matches(t, predicates)]
