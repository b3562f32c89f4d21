from cilisp.evaluation.evaluator import evaluate, cast_result

__all__ = ["evaluate", "cast_result"]
