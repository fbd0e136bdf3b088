# udphrase/core/tree.py
import logging
from typing import Dict, List, Optional, Union

import networkx as nx

from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken
from udphrase.exceptions import StructuralError, ValidationError

logger = logging.getLogger(__name__)


class DependencyTree:
    """
    Явная структура смежности поверх AnnotatedSentence.

    Карта детей строится один раз за O(n), после чего каждое поддерево
    разрешается за O(k), где k - размер поддерева.
    Для m существительных в предложении это O(n*m) в худшем случае,
    что приемлемо для единицы "одно предложение".
    """

    def __init__(self, sentence: AnnotatedSentence):
        self.sentence = sentence
        self.children: Dict[int, List[int]] = {t.index: [] for t in sentence.tokens}
        self.root: Optional[int] = None
        self.graph = nx.DiGraph()
        self._build()

    def _fail(self, message: str, indices=()):
        raise StructuralError(message, sent_id=self.sentence.sent_id, indices=indices)

    def _build(self):
        tokens = self.sentence.tokens
        n = len(tokens)
        if n == 0:
            return

        roots = []
        self.graph.add_nodes_from(range(n))

        for token in tokens:
            parent = token.parent_index
            if parent is None:
                roots.append(token.index)
                continue

            # HEAD должен ссылаться на существующий токен и не на самого себя
            if not 0 <= parent < n:
                self._fail(
                    f"Token {token.index} ('{token.text}'): parent {parent} is out of range [0, {n})",
                    (token.index,),
                )
            if parent == token.index:
                self._fail(f"Token {token.index} ('{token.text}') is its own parent", (token.index,))

            self.children[parent].append(token.index)
            self.graph.add_edge(parent, token.index)

        # В дереве ровно один корень
        if len(roots) != 1:
            self._fail(f"Found {len(roots)} root tokens (expected 1): {roots}", roots)
        self.root = roots[0]

        # При одном корне и одном родителе у остальных узлов недостижимыми
        # могут быть только узлы на цикле
        try:
            cycle = nx.find_cycle(self.graph)
        except nx.NetworkXNoCycle:
            pass
        else:
            nodes = sorted({u for u, _ in cycle})
            self._fail(f"Cycle in parent relation through tokens {nodes}", nodes)

        logger.debug(f"Built dependency tree: {n} tokens, root={self.root}")

    def __len__(self):
        return len(self.sentence.tokens)

    def subtree(self, node_index: int) -> List[AnnotatedToken]:
        """
        Узел и все его транзитивные зависимые в исходном порядке слов.
        Порядок обхода (DFS) внутри не важен - результат сортируется по index.
        """
        n = len(self.sentence.tokens)
        if not isinstance(node_index, int) or not 0 <= node_index < n:
            raise ValidationError(f"Node index {node_index} is out of range [0, {n})")

        visited = set()
        stack = [node_index]
        while stack:
            current = stack.pop()
            if current in visited:
                self._fail(f"Token {current} reached twice while resolving subtree of {node_index}", (current,))
            visited.add(current)
            stack.extend(self.children[current])

        tokens = self.sentence.tokens
        return [tokens[i] for i in sorted(visited)]

    def depth(self) -> int:
        """
        Максимальная глубина дерева в ребрах от корня до самого глубокого листа.
        """
        if self.graph.number_of_edges() == 0:
            return 0
        return nx.dag_longest_path_length(self.graph)

    def is_projective(self) -> bool:
        """
        Проверка на пересечение дуг (start < start' < end < end').
        Дуга корня не учитывается.
        """
        arcs = []
        for token in self.sentence.tokens:
            if token.parent_index is None:
                continue
            # Дуга всегда от min к max для проверки пересечений
            arcs.append(tuple(sorted((token.index, token.parent_index))))

        for i in range(len(arcs)):
            for j in range(i + 1, len(arcs)):
                s1, e1 = arcs[i]
                s2, e2 = arcs[j]
                if s1 < s2 < e1 < e2 or s2 < s1 < e2 < e1:
                    return False
        return True


def resolve_subtree(
        sentence: Union[AnnotatedSentence, DependencyTree],
        node_index: int
) -> List[AnnotatedToken]:
    """
    Упорядоченное по index поддерево узла node_index.

    Если передан AnnotatedSentence, смежность строится заново (O(n)).
    Для серии запросов по одному предложению передавайте готовый DependencyTree.
    """
    tree = sentence if isinstance(sentence, DependencyTree) else DependencyTree(sentence)
    return tree.subtree(node_index)
