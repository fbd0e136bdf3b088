from .data_structures import (
    AnnotatedSentence,
    AnnotatedToken,
    Dependent,
    LexicalStats,
    NominalPhraseRecord,
    Side,
)
from .interfaces import BaseAnnotator
from .tree import DependencyTree, resolve_subtree
