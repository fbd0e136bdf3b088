from udphrase.core.data_structures import (
    AnnotatedSentence,
    AnnotatedToken,
    Dependent,
    LexicalStats,
    NominalPhraseRecord,
    Side,
)
from udphrase.core.tree import DependencyTree, resolve_subtree
from udphrase.exceptions import DivisionError, StructuralError, UDPhraseError, ValidationError
from udphrase.morphology import filter_tokens, matches
from udphrase.phrases import extract_nominal_phrases
from udphrase.statistics import lexical_stats, normalize, type_token_ratio

__version__ = "0.1.0"
