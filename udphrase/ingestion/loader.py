# udphrase/ingestion/loader.py
import logging
from pathlib import Path
from typing import Generator, Iterable, List, Optional, Union

from conllu import parse, parse_incr
from conllu.models import TokenList

from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken
from udphrase.ingestion.validators import DataValidator
from udphrase.morphology import parse_feats

logger = logging.getLogger(__name__)


class ConlluLoader:
    """
    Загрузчик размеченных предложений из CoNLL-U.

    Превращает conllu.TokenList в неизменяемый AnnotatedSentence:
    ID (1-based) -> index (0-based), HEAD=0 -> parent_index=None.
    """

    def __init__(self, strict: bool = False):
        # Определение уровня строгости валидации
        self.strict_validation = strict
        self.skipped = 0

    @classmethod
    def from_config(cls, cfg: dict) -> "ConlluLoader":
        level = cfg.get("ingestion", {}).get("validation_level", "lenient")
        return cls(strict=(level == "strict"))

    @staticmethod
    def to_sentence(token_list: TokenList, fallback_id: Optional[str] = None) -> AnnotatedSentence:
        # Исключаем мульти-токены (1-2) и пустые узлы (1.1)
        words = [t for t in token_list if isinstance(t['id'], int)]
        id_to_index = {t['id']: i for i, t in enumerate(words)}

        tokens = []
        for i, t in enumerate(words):
            head = t['head']
            if head == 0 or head is None:
                parent_index = None
            else:
                # Ссылку на несуществующий ID оставляем как есть: ее поймает DependencyTree
                parent_index = id_to_index.get(head, head - 1)

            feats = t['feats']
            if isinstance(feats, str):
                feats = parse_feats(feats)

            lemma = t['lemma']
            tokens.append(AnnotatedToken(
                index=i,
                text=t['form'],
                pos=t['upos'],
                dependency_relation=t['deprel'] or "_",
                morphology=dict(feats or {}),
                parent_index=parent_index,
                lemma=lemma if lemma and lemma != "_" else None,
            ))

        return AnnotatedSentence(
            tokens=tokens,
            sent_id=token_list.metadata.get("sent_id", fallback_id),
            text=token_list.metadata.get("text"),
        )

    def _convert(self, token_lists: Iterable[TokenList], source: str) -> Generator[AnnotatedSentence, None, None]:
        for n, token_list in enumerate(token_lists, 1):
            # Валидация "на лету"
            val_res = DataValidator.validate_sentence(token_list, strict=self.strict_validation)
            sid = token_list.metadata.get('sent_id', f"{source}#{n}")

            if not val_res.is_valid:
                # Логируем, но не падаем
                self.skipped += 1
                logger.warning(f"Skipped invalid sentence {sid} in {source}: {val_res.errors}")
                continue

            yield self.to_sentence(token_list, fallback_id=sid)

    def load_stream(self, file_paths: List[Union[str, Path]]) -> Generator[AnnotatedSentence, None, None]:
        """
        Потоковый генератор валидированных предложений.
        """
        for fp in file_paths:
            fp = Path(fp)
            logger.info(f"Parsing file: {fp.name}")
            with open(fp, "r", encoding="utf-8") as f:
                # parse_incr читает файл лениво
                yield from self._convert(parse_incr(f), fp.name)

    def load_string(self, data: str, source: str = "<string>") -> List[AnnotatedSentence]:
        return list(self._convert(parse(data), source))
