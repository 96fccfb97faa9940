"""
Tests for the cognitive distortion classifier and pattern catalog.
"""

import re

from anger_journal.classifier import classify
from anger_journal.models import DistortionType
from anger_journal.patterns import (
    CATALOG,
    DistortionPattern,
    distortion_label,
    get_pattern,
)


def types(findings):
    return [f.type for f in findings]


class TestClassify:
    """Test suite for classify()."""

    def test_labeling(self):
        findings = classify("あいつは本当にバカだ")
        assert types(findings) == [DistortionType.LABELING]

    def test_mind_reading(self):
        findings = classify("彼はどうせ私のことを嫌っているに違いない")
        assert types(findings) == [DistortionType.MIND_READING]

    def test_all_or_nothing(self):
        findings = classify("いつも失敗ばかりだ")
        assert types(findings) == [DistortionType.ALL_OR_NOTHING]

    def test_externalization(self):
        findings = classify("私が成功しないのは環境のせいだ")
        assert types(findings) == [DistortionType.EXTERNALIZATION]

    def test_self_blame_also_matches_broad_externalization_rule(self):
        """The bare "のせい" rule fires alongside personalization."""
        findings = classify("このプロジェクトが遅れたのは私のせいです")
        assert types(findings) == [
            DistortionType.PERSONALIZATION,
            DistortionType.EXTERNALIZATION,
        ]

    def test_multiple_distortions(self):
        found = types(classify("いつも私のせいでダメになる"))
        assert len(found) >= 2
        assert DistortionType.ALL_OR_NOTHING in found
        assert DistortionType.PERSONALIZATION in found

    def test_no_distortions(self):
        assert classify("今日は天気が良いので散歩に行こう") == []

    def test_empty_and_blank_input(self):
        assert classify("") == []
        assert classify("   ", "  ", "\n") == []

    def test_situation_and_evidence_participate(self):
        assert types(classify("", situation="あいつが来た")) == [DistortionType.LABELING]
        assert types(classify("", evidence="全部見ていた")) == [
            DistortionType.ALL_OR_NOTHING
        ]

    def test_fields_are_joined_with_spaces(self):
        """Rules do not match across the boundary between two fields."""
        assert classify("私の", situation="せい") == []

    def test_one_finding_per_category(self):
        findings = classify("あいつはバカで無能で最低だ、くそ")
        assert types(findings) == [DistortionType.LABELING]

    def test_findings_follow_catalog_order(self):
        findings = classify("社会が悪い", situation="いつも", evidence="あいつ")
        assert types(findings) == [
            DistortionType.LABELING,
            DistortionType.ALL_OR_NOTHING,
            DistortionType.EXTERNALIZATION,
        ]

    def test_deterministic(self):
        text = "どうせ全部私が悪いんだから、きっとみんなそう思っている"
        assert classify(text) == classify(text)

    def test_repeated_calls_are_independent(self):
        """A match in one call does not affect the next."""
        for _ in range(3):
            assert types(classify("バカ")) == [DistortionType.LABELING]

    def test_case_insensitive(self):
        catalog = (
            DistortionPattern(
                type=DistortionType.LABELING,
                label="ラベリング",
                description="d",
                suggestion="s",
                rules=(re.compile("idiot", re.IGNORECASE),),
            ),
        )
        assert types(classify("He is an IDIOT", catalog=catalog)) == [
            DistortionType.LABELING
        ]

    def test_finding_text_comes_from_catalog(self):
        (finding,) = classify("最悪")
        pattern = get_pattern(DistortionType.LABELING)
        assert finding.description == pattern.description
        assert finding.suggestion == pattern.suggestion


class TestCatalog:
    """Test suite for the pattern catalog."""

    def test_catalog_order(self):
        assert [p.type for p in CATALOG] == list(DistortionType)

    def test_labels(self):
        assert distortion_label("labeling") == "ラベリング"
        assert distortion_label("mind_reading") == "読心"
        assert distortion_label("all_or_nothing") == "白黒思考"
        assert distortion_label("personalization") == "個人化"
        assert distortion_label("externalization") == "外部化"
        assert distortion_label(DistortionType.LABELING) == "ラベリング"

    def test_unknown_label_falls_back_to_type(self):
        assert distortion_label("unknown_type") == "unknown_type"
        assert get_pattern("unknown_type") is None
