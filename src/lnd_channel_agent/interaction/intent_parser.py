"""
Deterministic intent parser for channel queries.

Routes user queries to intents without LLM calls. Rules are evaluated in
order and the first match wins, so more specific intents must come before
more general ones. Anything unmatched is UNKNOWN.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .intent_types import Intent, IntentType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentRule:
    """Keywords (whole words or phrases) that select an intent."""
    intent_type: IntentType
    keywords: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "intent_type", IntentType(self.intent_type))

    @property
    def phrases(self) -> Tuple[str, ...]:
        """Normalized, non-blank keywords, longest first."""
        # Longest first so multi-word phrases win over their prefixes
        return tuple(sorted({k.lower().strip() for k in self.keywords if k.strip()}, key=len, reverse=True))

    def compile(self) -> "re.Pattern[str]":
        ordered = self.phrases
        alternatives = "|".join(re.escape(k).replace(r"\ ", r"\s+") for k in ordered)
        return re.compile(rf"\b(?:{alternatives})\b")


LIQUIDITY_KEYWORDS = (
    "liquidity",
    "balance",
    "balances",
    "balanced",
    "inbound",
    "outbound",
    "local balance",
    "remote balance",
    "can i send",
    "can i receive",
    "spendable",
    "receivable",
)

HEALTH_KEYWORDS = (
    "health",
    "healthy",
    "unhealthy",
    "status",
    "inactive",
    "offline",
    "online",
    "problem",
    "problems",
    "issue",
    "issues",
    "working",
    "performing",
    "performance",
)

LIST_KEYWORDS = (
    "list",
    "show",
    "channel",
    "channels",
    "peer",
    "peers",
    "open channels",
    "how many channels",
    "connected",
)

DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(IntentType.CHANNEL_LIQUIDITY, LIQUIDITY_KEYWORDS),
    IntentRule(IntentType.CHANNEL_HEALTH, HEALTH_KEYWORDS),
    IntentRule(IntentType.CHANNEL_LIST, LIST_KEYWORDS),
)


class IntentParser:
    """
    Deterministic intent parser.

    Classifies queries with ordered keyword rules. Never raises: empty or
    unmatched input yields an UNKNOWN intent carrying the original query.
    """

    def __init__(self, rules: Optional[Sequence[IntentRule]] = None):
        """
        :param rules: Ordered rules, most specific first. Defaults to
            liquidity, then health, then list.
        """
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self._compiled = [(rule.intent_type, rule.compile()) for rule in self._rules if rule.phrases]

    @property
    def rules(self) -> Tuple[IntentRule, ...]:
        return self._rules

    def parse_intent(self, query: str) -> Intent:
        """
        Classify a query.

        :param query: Raw user query (may be empty)
        :return: Intent with the matched type and the original query
        """
        text = query if isinstance(query, str) else ""
        q = text.lower().strip()

        if q:
            for intent_type, pattern in self._compiled:
                if pattern.search(q):
                    logger.debug(f"Query matched {intent_type.value}: '{q}'")
                    return Intent(type=intent_type, query=text)

        return Intent(type=IntentType.UNKNOWN, query=text)
