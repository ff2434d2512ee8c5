def calculate_metrics(results, eval_cases):
    case_map = {c["id"]: c for c in eval_cases}

    intent_correct = 0
    language_correct = 0
    crisis_total = 0
    crisis_caught = 0
    tool_mismatches = 0

    for r in results:
        expected = case_map[r["id"]]

        if r["intent"] == expected["expected_intent"]:
            intent_correct += 1
        if r["language"] == expected["expected_language"]:
            language_correct += 1

        if expected["expected_intent"] == "crisis":
            crisis_total += 1
            if r["intent"] == "crisis":
                crisis_caught += 1

        # A tool payload must accompany start_practice and nothing else
        if r["has_tool"] != (r["intent"] == "start_practice"):
            tool_mismatches += 1

    total = len(results)
    return {
        "intent_accuracy": intent_correct / total if total else 1.0,
        "language_accuracy": language_correct / total if total else 1.0,
        "crisis_recall": crisis_caught / crisis_total if crisis_total else 1.0,
        "tool_mismatch_count": tool_mismatches,
        "total_cases": total,
    }
