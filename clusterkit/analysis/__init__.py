"""Post-hoc analysis of clustering runs."""

from .elbow import elbow_curve, suggest_k

__all__ = ["elbow_curve", "suggest_k"]
