"""
Interaction layer for intent classification.

Sits between the tool boundary and the query handler, providing
deterministic intent classification without LLM calls.
"""
from .intent_types import Intent, IntentType
from .intent_parser import DEFAULT_RULES, IntentParser, IntentRule

__all__ = ["Intent", "IntentType", "IntentParser", "IntentRule", "DEFAULT_RULES"]
