"""
Cognitive distortion pattern catalog.

Each distortion category is a catalog entry holding its match rules, a
description, an improvement suggestion and a display label. The classifier
walks this table in order, so adding a category or rule only means editing
the data below.
"""

import re
from dataclasses import dataclass

from .models import DistortionFinding, DistortionType

CATALOG_VERSION = "1"


@dataclass(frozen=True)
class DistortionPattern:
    """Match rules and advice text for one distortion category."""

    type: DistortionType
    label: str
    description: str
    suggestion: str
    rules: tuple[re.Pattern[str], ...]

    def matches(self, text: str) -> bool:
        """Return True if any rule matches anywhere in ``text``."""
        return any(rule.search(text) for rule in self.rules)

    def finding(self) -> DistortionFinding:
        return DistortionFinding(
            type=self.type, description=self.description, suggestion=self.suggestion
        )


def _compile(*rules: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(rule, re.IGNORECASE) for rule in rules)


CATALOG: tuple[DistortionPattern, ...] = (
    DistortionPattern(
        type=DistortionType.LABELING,
        label="ラベリング",
        description="相手や自分に否定的なレッテルを貼っています。",
        suggestion="具体的な行動や事実に焦点を当てましょう。",
        rules=_compile(
            "あいつ", "やつ", "バカ", "ダメ", "無能", "最悪", "くそ", "うざい",
            "だめな人", "ひどい人", "最低",
        ),
    ),
    DistortionPattern(
        type=DistortionType.MIND_READING,
        label="読心",
        description="相手の気持ちや考えを推測で決めつけています。",
        suggestion="確認せずに推測は控え、事実に基づいて判断しましょう。",
        rules=_compile(
            "どうせ.*考えて", "きっと.*思っている", "に違いない", "絶対.*思っている",
            "どうせ.*ない", "はず", "間違いなく",
        ),
    ),
    DistortionPattern(
        type=DistortionType.ALL_OR_NOTHING,
        label="白黒思考",
        description="物事を極端に捉える白黒思考が見られます。",
        suggestion="グレーゾーンや中間的な視点を探してみましょう。",
        rules=_compile(
            "いつも", "必ず", "絶対", "全然", "まったく", "完全に", "全部",
            "一度も", "決して", "すべて",
        ),
    ),
    DistortionPattern(
        type=DistortionType.PERSONALIZATION,
        label="個人化",
        description="すべてを自分のせいにする傾向があります。",
        suggestion="他の要因や外部環境の影響も考慮してみましょう。",
        rules=_compile(
            "私のせい", "自分が悪い", "私が.*だから", "自分の責任", "私のミス", "自分が原因",
        ),
    ),
    DistortionPattern(
        type=DistortionType.EXTERNALIZATION,
        label="外部化",
        description="すべてを外部要因のせいにする傾向があります。",
        suggestion="自分でコントロールできる部分も探してみましょう。",
        # "のせい" also matches self-blame such as 私のせい.
        rules=_compile(
            "相手が悪い", "環境のせい", "のせい", "運が悪い", "世の中が", "社会が", "他人が",
        ),
    ),
)

_BY_TYPE = {pattern.type.value: pattern for pattern in CATALOG}


def get_pattern(distortion_type: str) -> DistortionPattern | None:
    """Look up the catalog entry for a category, or None if unknown."""
    return _BY_TYPE.get(str(getattr(distortion_type, "value", distortion_type)))


def distortion_label(distortion_type: str) -> str:
    """
    Get the display label for a distortion category.

    Args:
        distortion_type: Category value, e.g. "labeling"

    Returns:
        The label (e.g. "ラベリング"), or the input unchanged if unknown
    """
    pattern = get_pattern(distortion_type)
    if pattern is None:
        return str(distortion_type)
    return pattern.label
