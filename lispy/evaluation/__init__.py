from lispy.evaluation.evaluator import evaluate
from lispy.evaluation.apply import call

__all__ = ["evaluate", "call"]
