"""Issuer detection from statement text.

Each issuer strategy owns a DetectionRule. A rule matches when any
brand marker occurs in the text, or when a qualified brand token occurs
together with one of the rule's context keywords ("credit card",
"statement"). The second form keeps short tokens such as "SBI" from
matching incidental mentions in unrelated documents.
"""

import re
from dataclasses import dataclass, field

DEFAULT_CONTEXT = (r"CREDIT\s+CARD", r"STATEMENT")


@dataclass(frozen=True)
class DetectionRule:
    """Case-insensitive brand test for one issuer.

    Example:
        >>> rule = DetectionRule(brands=(r"HDFC\\s*BANK",), qualified=(r"\\bHDFC\\b",))
        >>> rule.matches("hdfc credit card statement")
        True
    """

    brands: tuple[str, ...] = ()
    qualified: tuple[str, ...] = ()
    context: tuple[str, ...] = DEFAULT_CONTEXT
    _compiled: dict[str, list[re.Pattern]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        compiled = {
            "brands": [re.compile(p, re.IGNORECASE) for p in self.brands],
            "qualified": [re.compile(p, re.IGNORECASE) for p in self.qualified],
            "context": [re.compile(p, re.IGNORECASE) for p in self.context],
        }
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, text: str | None) -> bool:
        """Check whether the text belongs to this issuer."""
        if not text:
            return False

        if self._matches_any(text, self._compiled["brands"]):
            return True

        return self._matches_any(text, self._compiled["qualified"]) and self._matches_any(
            text, self._compiled["context"]
        )

    @staticmethod
    def _matches_any(text: str, patterns: list[re.Pattern]) -> bool:
        return any(pattern.search(text) for pattern in patterns)
