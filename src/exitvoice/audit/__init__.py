"""Audit trail for engine decisions."""

from exitvoice.audit.decision_log import DecisionLog, DecisionRecord

__all__ = ["DecisionLog", "DecisionRecord"]
