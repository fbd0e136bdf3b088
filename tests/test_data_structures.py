import unittest

from pydantic import ValidationError as PydanticValidationError

from udphrase.core.data_structures import AnnotatedSentence, AnnotatedToken, Dependent, NominalPhraseRecord, Side


class TestAnnotatedToken(unittest.TestCase):
    def test_defaults(self):
        token = AnnotatedToken(index=0, text="Run", pos="verb", dependency_relation="ROOT")
        self.assertEqual(token.pos, "VERB")
        self.assertEqual(token.morphology, {})
        self.assertTrue(token.is_root)
        self.assertIsNone(token.lemma)

    def test_frozen(self):
        token = AnnotatedToken(index=0, text="Run", pos="VERB", dependency_relation="ROOT")
        with self.assertRaises(PydanticValidationError):
            token.text = "Walk"

    def test_morphology_is_read_only(self):
        feats = {"Number": "Sing"}
        token = AnnotatedToken(index=0, text="dog", pos="NOUN", dependency_relation="ROOT", morphology=feats)
        with self.assertRaises(TypeError):
            token.morphology["Number"] = "Plur"

        # Исходный словарь вызывающего не связан с токеном
        feats["Number"] = "Plur"
        self.assertEqual(token.morphology["Number"], "Sing")

        bare = AnnotatedToken(index=0, text="run", pos="VERB", dependency_relation="ROOT")
        with self.assertRaises(TypeError):
            bare.morphology["Tense"] = "Past"

    def test_negative_index(self):
        with self.assertRaises(PydanticValidationError):
            AnnotatedToken(index=-1, text="x", pos="X", dependency_relation="dep")

    def test_empty_pos(self):
        with self.assertRaises(PydanticValidationError):
            AnnotatedToken(index=0, text="x", pos="", dependency_relation="dep")


class TestAnnotatedSentence(unittest.TestCase):
    def test_index_must_match_position(self):
        with self.assertRaises(PydanticValidationError):
            AnnotatedSentence(tokens=[
                AnnotatedToken(index=1, text="a", pos="NOUN", dependency_relation="ROOT"),
            ])

    def test_sequence_protocol(self):
        sentence = AnnotatedSentence(tokens=[
            AnnotatedToken(index=0, text="Dogs", pos="NOUN", dependency_relation="nsubj", parent_index=1),
            AnnotatedToken(index=1, text="bark", pos="VERB", dependency_relation="ROOT"),
        ])
        self.assertEqual(len(sentence), 2)
        self.assertEqual(sentence[1].text, "bark")
        self.assertEqual([t.text for t in sentence], ["Dogs", "bark"])
        self.assertIsInstance(sentence.tokens, tuple)
        self.assertEqual(sentence.text_or_join(), "Dogs bark")


class TestNominalPhraseRecord(unittest.TestCase):
    def test_left_right_split(self):
        head = AnnotatedToken(index=1, text="cat", pos="NOUN", dependency_relation="ROOT")
        record = NominalPhraseRecord(
            phrase_text="the cat outside",
            head=head,
            dependents=[
                Dependent(token=AnnotatedToken(index=0, text="the", pos="DET", dependency_relation="det",
                                               parent_index=1), side=Side.LEFT),
                Dependent(token=AnnotatedToken(index=2, text="outside", pos="ADV", dependency_relation="advmod",
                                               parent_index=1), side=Side.RIGHT),
            ],
        )
        self.assertEqual([t.text for t in record.left_dependents], ["the"])
        self.assertEqual([t.text for t in record.right_dependents], ["outside"])
        self.assertEqual(record.size, 3)


if __name__ == '__main__':
    unittest.main()
