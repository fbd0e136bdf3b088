# udphrase/engines/spacy_engine.py
import logging
from typing import Any, Iterable, List, Optional

from udphrase.config import DEFAULT_SPACY_MODEL
from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken
from udphrase.core.interfaces import BaseAnnotator

logger = logging.getLogger(__name__)


class SpacyAnnotator(BaseAnnotator):
    """
    Адаптер spaCy -> AnnotatedSentence.

    Модель передается явно (уже загруженный Language) или грузится по имени
    при создании объекта. Глобального состояния нет: каждый SpacyAnnotator
    владеет своим пайплайном.
    """

    def __init__(self, nlp: Optional[Any] = None, model_name: str = DEFAULT_SPACY_MODEL):
        self.model_name = model_name
        self.nlp = nlp if nlp is not None else self._load(model_name)

    @staticmethod
    def _load(model_name: str):
        logger.info(f"Loading spaCy model '{model_name}'...")
        try:
            import spacy
            return spacy.load(model_name)
        except Exception as e:
            raise RuntimeError(
                f"spaCy model '{model_name}' could not be loaded. "
                f"Install it with 'python -m spacy download {model_name}'.\n"
                f"Original error: {e}"
            ) from e

    def annotate(self, text: str) -> List[AnnotatedSentence]:
        return self.convert_doc(self.nlp(text))

    def annotate_many(self, texts: Iterable[str], batch_size: int = 32) -> List[AnnotatedSentence]:
        sentences = []
        for doc in self.nlp.pipe(texts, batch_size=batch_size):
            sentences.extend(self.convert_doc(doc))
        return sentences

    @staticmethod
    def convert_doc(doc) -> List[AnnotatedSentence]:
        """
        Doc -> список предложений. Индексы токенов пересчитываются
        относительно начала предложения; у корня spaCy head указывает на сам токен.
        """
        output_sentences = []

        for sent_no, sent in enumerate(doc.sents, 1):
            sent_offset = sent.start
            tokens = []

            for token in sent:
                if token.head.i == token.i:
                    parent_index = None
                else:
                    parent_index = token.head.i - sent_offset

                tokens.append(AnnotatedToken(
                    index=token.i - sent_offset,
                    text=token.text,
                    pos=token.pos_ or "X",
                    dependency_relation=token.dep_ or "_",
                    morphology=token.morph.to_dict(),
                    parent_index=parent_index,
                    lemma=token.lemma_ or None,
                ))

            output_sentences.append(AnnotatedSentence(
                tokens=tokens,
                sent_id=str(sent_no),
                text=sent.text,
            ))

        return output_sentences
