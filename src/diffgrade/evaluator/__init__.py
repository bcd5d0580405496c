"""Evaluation driver and result models."""

from diffgrade.evaluator.engine import evaluate
from diffgrade.evaluator.models import EvaluationResult, FileResult

__all__ = ["EvaluationResult", "FileResult", "evaluate"]
