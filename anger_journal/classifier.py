"""
Rule-based cognitive distortion classifier.
"""

from .models import DistortionFinding
from .patterns import CATALOG, DistortionPattern


def classify(
    thoughts: str,
    situation: str = "",
    evidence: str = "",
    catalog: tuple[DistortionPattern, ...] = CATALOG,
) -> list[DistortionFinding]:
    """
    Detect cognitive distortions in journal text.

    The three fields are joined with single spaces and case-folded, then every
    catalog category is tested in catalog order. A category contributes at most
    one finding no matter how many of its rules match.

    Args:
        thoughts: The automatic thoughts to analyze
        situation: Optional description of the situation
        evidence: Optional evidence supporting the thoughts
        catalog: Pattern table to evaluate (defaults to the built-in catalog)

    Returns:
        Findings in catalog order; empty when nothing matches
    """
    text = " ".join((thoughts, situation, evidence)).casefold()
    return [pattern.finding() for pattern in catalog if pattern.matches(text)]
