"""Engine policy configuration."""

from exitvoice.policy.resolver import PolicyResolver

__all__ = ["PolicyResolver"]
