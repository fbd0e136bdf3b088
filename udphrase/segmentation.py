# udphrase/segmentation.py
import logging
from typing import List

from razdel import tokenize as razdel_tokenize

logger = logging.getLogger(__name__)


class RazdelSegmenter:
    """
    Обертка над библиотекой Razdel для токенизации сырого текста.
    Нужна только лексической статистике по неразмеченному тексту,
    поэтому оффсеты не сохраняются.
    """

    def words(self, text: str) -> List[str]:
        return [item.text for item in razdel_tokenize(text)]
