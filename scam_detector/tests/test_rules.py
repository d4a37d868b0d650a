import unittest
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from scam_detector.features.lexicon import SCAM_KEYWORDS, build_lexicon
from scam_detector.features.rules import (
    normalize,
    keyword_score,
    pattern_score,
    urgency_score,
    grammar_score,
    basic_rules,
)


class TestNormalize(unittest.TestCase):
    def test_joins_with_single_space_and_keeps_case(self):
        n = normalize("Hello THERE", "Body Text")
        self.assertEqual(n.original, "Hello THERE Body Text")
        self.assertEqual(n.text, "hello there body text")

    def test_total_over_odd_input(self):
        self.assertEqual(normalize("", "").text, " ")
        self.assertEqual(normalize(None, None).text, " ")
        n = normalize("\x00\x07", "Ünïcode ✓")
        self.assertEqual(n.text, "\x00\x07 ünïcode ✓")


class TestKeywordScore(unittest.TestCase):
    def test_case_insensitive(self):
        self.assertEqual(keyword_score("URGENT deadline"), keyword_score("urgent deadline"))
        self.assertAlmostEqual(keyword_score("urgent deadline"), 2 / len(SCAM_KEYWORDS))

    def test_substring_match(self):
        self.assertAlmostEqual(keyword_score("please reply urgently"), 2 / len(SCAM_KEYWORDS))

    def test_repeats_count_once(self):
        self.assertEqual(keyword_score("lottery lottery lottery"), keyword_score("lottery"))

    def test_no_hits(self):
        self.assertEqual(keyword_score("see you at lunch"), 0.0)
        self.assertEqual(keyword_score(""), 0.0)

    def test_can_exceed_one_before_clamping(self):
        # known property: density is scaled by 2.0 and left unclamped here
        self.assertEqual(keyword_score(" ".join(SCAM_KEYWORDS)), 2.0)
        half_plus = " ".join(SCAM_KEYWORDS[:9])
        self.assertGreater(keyword_score(half_plus), 1.0)


class TestPatternScore(unittest.TestCase):
    def test_allow_listed_url_not_flagged(self):
        self.assertEqual(pattern_score("search at http://www.google.com/search"), 0.0)
        self.assertEqual(pattern_score("https://www.amazon.com/orders"), 0.0)

    def test_other_urls_flagged(self):
        self.assertAlmostEqual(pattern_score("go to http://google.com"), 2 / 3)
        self.assertAlmostEqual(pattern_score("https://secure-login.example.net/x"), 2 / 3)

    def test_bank_details(self):
        self.assertAlmostEqual(pattern_score("update your BANK   Routing number"), 2 / 3)
        self.assertEqual(pattern_score("the bank is closed"), 0.0)

    def test_personal_information(self):
        self.assertAlmostEqual(pattern_score("send ur password"), 2 / 3)
        self.assertAlmostEqual(pattern_score("Send your Social Security number"), 2 / 3)

    def test_all_patterns(self):
        text = "http://x.biz send your ssn and bank details"
        self.assertEqual(pattern_score(text), 2.0)


class TestUrgencyScore(unittest.TestCase):
    def test_case_insensitive(self):
        self.assertEqual(urgency_score("URGENT deadline"), urgency_score("urgent deadline"))
        self.assertAlmostEqual(urgency_score("urgent deadline"), 0.4)

    def test_all_phrases(self):
        text = ("urgent immediate act now limited time expires soon today only "
                "last chance deadline quickly hurry")
        self.assertEqual(urgency_score(text), 2.0)

    def test_none(self):
        self.assertEqual(urgency_score("see you next week"), 0.0)


class TestGrammarScore(unittest.TestCase):
    def test_uppercase_uses_original_text(self):
        original = "A" * 21
        self.assertAlmostEqual(grammar_score(original.lower(), original), 0.2)
        self.assertEqual(grammar_score(original.lower()), 0.0)
        self.assertEqual(grammar_score(("A" * 20).lower(), "A" * 20), 0.0)

    def test_without_original_inspects_text(self):
        self.assertAlmostEqual(grammar_score("ABCDEFGHIJKLMNOPQRSTUVWXYZ"), 0.2)

    def test_exclamation_marks(self):
        self.assertEqual(grammar_score("wow!!!!!"), 0.0)
        self.assertAlmostEqual(grammar_score("wow!!!!!!"), 0.2)

    def test_mistakes_counted_and_capped(self):
        self.assertAlmostEqual(grammar_score("kindly do the needful"), 0.2)
        self.assertAlmostEqual(grammar_score("you is late, please to revert back"), 0.6)
        text = "your the one, you is, we is, they is, kindly do the needful, revert back"
        self.assertEqual(grammar_score(text), 1.0)


class TestBasicRules(unittest.TestCase):
    def test_feature_names(self):
        self.assertEqual(set(basic_rules("a", "b")), {"keyword", "pattern", "urgency", "grammar"})

    def test_injected_lexicon(self):
        lex = build_lexicon(keywords=["widget"], urgency=["soonish"])
        r = basic_rules("Widget", "arrives soonish", lex)
        self.assertEqual(r["keyword"], 2.0)
        self.assertEqual(r["urgency"], 2.0)

    def test_shouting_subject(self):
        r = basic_rules("THIS IS A VERY LOUD SUBJECT LINE", "body")
        self.assertAlmostEqual(r["grammar"], 0.2)


if __name__ == '__main__':
    unittest.main()
