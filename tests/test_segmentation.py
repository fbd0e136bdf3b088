import unittest

from udphrase.segmentation import RazdelSegmenter
from udphrase.statistics import normalize, type_token_ratio


class TestRazdelSegmenter(unittest.TestCase):
    def setUp(self):
        self.segmenter = RazdelSegmenter()

    def test_words_cover_text(self):
        text = "Мама мыла раму. Папа читал газету, а мама мыла раму."
        words = self.segmenter.words(text)
        # Токены идут подряд и без пробелов складываются в исходный текст
        self.assertEqual("".join(words), text.replace(" ", ""))
        self.assertTrue(all(w.strip() == w and w for w in words))

    def test_punctuation_split(self):
        self.assertEqual(self.segmenter.words("Мама мыла раму."), ["Мама", "мыла", "раму", "."])

    def test_words_feed_statistics(self):
        words = normalize(self.segmenter.words("Мама мыла раму. Мама!"))
        self.assertEqual(words, ["мама", "мыла", "раму", "мама"])
        self.assertEqual(type_token_ratio(words), 0.75)


if __name__ == '__main__':
    unittest.main()
