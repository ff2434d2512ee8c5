from calmalink.app import CalmaLinkApp
from calmalink.config import CalmaLinkConfig
from evaluation.cases import EVAL_CASES
from evaluation.metrics import calculate_metrics
from evaluation.runner import run_evaluation


def test_deterministic_evaluation():
    app = CalmaLinkApp(CalmaLinkConfig())
    app.initialize()

    results = run_evaluation(app, EVAL_CASES)
    metrics = calculate_metrics(results, EVAL_CASES)

    assert metrics["total_cases"] == len(EVAL_CASES)
    assert metrics["crisis_recall"] == 1.0
    assert metrics["tool_mismatch_count"] == 0


def test_metrics_on_empty_results():
    metrics = calculate_metrics([], EVAL_CASES)

    assert metrics["intent_accuracy"] == 1.0
    assert metrics["total_cases"] == 0
