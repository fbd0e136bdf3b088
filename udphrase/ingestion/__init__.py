from .loader import ConlluLoader
from .validators import DataValidator, ValidationResult
