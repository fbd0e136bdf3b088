# udphrase/pipeline.py
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from tqdm import tqdm

from udphrase.config import DEFAULT_CONFIG
from udphrase.core.data_structures import AnnotatedSentence
from udphrase.core.interfaces import BaseAnnotator
from udphrase.core.tree import DependencyTree
from udphrase.exceptions import DivisionError, StructuralError, ValidationError
from udphrase.morphology import Predicate, filter_tokens
from udphrase.phrases import extract_nominal_phrases
from udphrase.statistics import lexical_stats, most_common, normalize, pos_distribution

logger = logging.getLogger(__name__)


class PhrasePipeline:
    """
    Главный класс-оркестратор.
    Прогоняет каждое предложение через извлечение именных групп,
    морфологический фильтр и профиль дерева, затем считает статистику по корпусу.

    Предложения обрабатываются независимо: ошибка в одном не останавливает остальные.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, annotator: Optional[BaseAnnotator] = None):
        self.config = config or DEFAULT_CONFIG
        self.annotator = annotator
        self.head_pos = tuple(self.config["phrases"]["head_pos"])
        self.punct_pos = tuple(self.config["statistics"]["punct_pos"])
        self.precision = self.config["statistics"]["precision"]
        self.top_n = self.config["statistics"]["most_common"]

        logger.info(f"Initializing PhrasePipeline with head_pos={list(self.head_pos)}")

    def process_sentence(
            self,
            sentence: AnnotatedSentence,
            predicates: Optional[Sequence[Predicate]] = None
    ) -> Dict[str, Any]:
        """
        Результат для одного предложения. StructuralError пробрасывается вызывающему.
        """
        tree = DependencyTree(sentence)
        phrases = extract_nominal_phrases(tree, head_pos=self.head_pos)

        result = {
            "sent_id": sentence.sent_id,
            "text": sentence.text_or_join(),
            "phrases": [p.to_dict() for p in phrases],
            "profile": {
                "length": len(sentence),
                "depth": tree.depth(),
                "projective": tree.is_projective(),
            },
        }

        if predicates is not None:
            result["matches"] = [
                {"index": t.index, "text": t.text, "pos": t.pos}
                for t in filter_tokens(sentence, predicates)
            ]

        return result

    def process(
            self,
            sentences: Iterable[AnnotatedSentence],
            predicates: Optional[Sequence[Predicate]] = None,
            show_progress: bool = False
    ) -> Dict[str, Any]:
        """
        Полный цикл обработки набора предложений.
        Некорректные предложения логируются и попадают в errors.
        """
        processed: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []
        valid_sentences: List[AnnotatedSentence] = []

        iterator = tqdm(sentences, desc="Sentences", unit="sent") if show_progress else sentences

        for sentence in iterator:
            try:
                processed.append(self.process_sentence(sentence, predicates))
            except (StructuralError, ValidationError) as e:
                logger.warning(f"Skipped sentence {sentence.sent_id}: {e}")
                errors.append({"sent_id": sentence.sent_id, "error": type(e).__name__, "message": str(e)})
                continue
            valid_sentences.append(sentence)

        logger.info(f"Processed {len(processed)} sentences, skipped {len(errors)}")

        return {
            "sentences": processed,
            "errors": errors,
            "statistics": self.corpus_statistics(valid_sentences),
        }

    def corpus_statistics(self, sentences: List[AnnotatedSentence]) -> Dict[str, Any]:
        words = normalize((t for s in sentences for t in s.tokens), punct_pos=self.punct_pos)

        try:
            stats = lexical_stats(words, precision=self.precision).to_dict()
        except DivisionError:
            # Пустой корпус: TTR не определен
            stats = {"token_count": 0, "type_count": 0, "ttr": None}

        stats["most_common"] = most_common(words, self.top_n)
        stats["pos"] = dict(pos_distribution(sentences).most_common())
        return stats

    def process_text(self, text: str, predicates: Optional[Sequence[Predicate]] = None) -> Dict[str, Any]:
        """
        Сырой текст -> внешний анализатор -> обработка.
        """
        if self.annotator is None:
            raise ValueError("PhrasePipeline was created without an annotator; pass one to process raw text")

        sentences = self.annotator.annotate(text)
        if not sentences:
            return {"sentences": [], "errors": [], "statistics": self.corpus_statistics([])}

        return self.process(sentences, predicates)
