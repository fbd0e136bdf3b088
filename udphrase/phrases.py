# udphrase/phrases.py
import logging
from typing import Iterable, List, Union

from udphrase.config import NOUN_POS
from udphrase.core.data_structures import AnnotatedSentence, Dependent, NominalPhraseRecord, Side
from udphrase.core.tree import DependencyTree

logger = logging.getLogger(__name__)


def extract_nominal_phrases(
        sentence: Union[AnnotatedSentence, DependencyTree],
        head_pos: Iterable[str] = NOUN_POS
) -> List[NominalPhraseRecord]:
    """
    Строит по одной именной группе на каждое существительное предложения.

    Каждая группа - это полное поддерево вершины, восстановленное в исходном
    порядке слов. Группы не объединяются и не дедуплицируются: поддерево
    одного существительного может целиком входить в группу другого.

    Можно передать готовый DependencyTree, чтобы не строить смежность повторно.

    Raises:
        StructuralError: если дерево зависимостей предложения некорректно,
            даже когда в предложении нет ни одной вершины-существительного.
    """
    if isinstance(sentence, DependencyTree):
        tree = sentence
        sentence = tree.sentence
    else:
        if not sentence.tokens:
            return []
        # Дерево проверяется до отбора вершин: битое предложение не должно
        # превращаться в "пустой" результат
        tree = DependencyTree(sentence)

    head_pos = set(head_pos)
    heads = [t for t in sentence.tokens if t.pos in head_pos]
    records = []

    for head in heads:
        subtree = tree.subtree(head.index)

        dependents = tuple(
            Dependent(token=t, side=Side.LEFT if t.index < head.index else Side.RIGHT)
            for t in subtree
            if t.index != head.index
        )

        records.append(NominalPhraseRecord(
            phrase_text=" ".join(t.text for t in subtree),
            head=head,
            dependents=dependents,
        ))

    logger.debug(f"Extracted {len(records)} nominal phrases from sentence {sentence.sent_id}")
    return records
