# udphrase/config.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "default.yaml"

# UPOS, которые считаются вершинами именных групп
NOUN_POS = ("NOUN",)

# UPOS, которые выбрасываются при нормализации потока токенов
PUNCT_POS = ("PUNCT", "SPACE")

# Точность отображения TTR (внутри считаем с полной точностью)
DISPLAY_PRECISION = 2

DEFAULT_SPACY_MODEL = "en_core_web_sm"

DEFAULT_CONFIG: Dict[str, Any] = {
    "phrases": {
        "head_pos": list(NOUN_POS),
    },
    "statistics": {
        "punct_pos": list(PUNCT_POS),
        "precision": DISPLAY_PRECISION,
        "most_common": 10,
    },
    "engine": {
        "spacy_model": DEFAULT_SPACY_MODEL,
    },
    "ingestion": {
        # strict: предложение без sent_id/text считается невалидным
        "validation_level": "lenient",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Читает YAML-конфиг и накладывает его поверх DEFAULT_CONFIG.
    Без аргумента берется config/default.yaml, если он есть рядом с пакетом.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return _merge(DEFAULT_CONFIG, {})
        path = DEFAULT_CONFIG_PATH

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_cfg = yaml.safe_load(f) or {}

    if not isinstance(user_cfg, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(user_cfg).__name__}")

    logger.debug(f"Loaded config from {path}")
    return _merge(DEFAULT_CONFIG, user_cfg)
