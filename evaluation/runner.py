from time import time


def run_evaluation(calmalink_app, eval_cases):
    results = []

    for case in eval_cases:
        start = time()
        envelope = calmalink_app.chat(case["messages"])
        latency_ms = int((time() - start) * 1000)

        results.append({
            "id": case["id"],
            "intent": envelope.intent,
            "language": envelope.language,
            "has_tool": envelope.tool is not None,
            "latency_ms": latency_ms,
        })

    return results
