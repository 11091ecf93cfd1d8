"""Decision engine — predicates, eligibility, alternative selection, and transitions."""

from exitvoice.engine.decision_engine import DecisionEngine, decide
from exitvoice.engine.eligibility import (
    ActionContext,
    EntryContext,
    ExitContext,
    VoiceContext,
    can_use,
)
from exitvoice.engine.executors import apply_exit, apply_voice
from exitvoice.engine.predicates import is_declining, tolerates
from exitvoice.engine.selector import (
    ScoredAlternative,
    best_alternative,
    best_alternative_position,
    rank_alternatives,
)

__all__ = [
    "DecisionEngine",
    "decide",
    "ActionContext",
    "EntryContext",
    "ExitContext",
    "VoiceContext",
    "can_use",
    "apply_exit",
    "apply_voice",
    "is_declining",
    "tolerates",
    "ScoredAlternative",
    "best_alternative",
    "best_alternative_position",
    "rank_alternatives",
]
