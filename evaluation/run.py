# Imports assume PYTHONPATH=src is set (e.g., PYTHONPATH=src python -m evaluation.run)
from calmalink.app import CalmaLinkApp
from calmalink.config import CalmaLinkConfig
from evaluation.cases import EVAL_CASES
from evaluation.metrics import calculate_metrics
from evaluation.runner import run_evaluation

# Step 1 - Evaluation config (deterministic responder only)
config = CalmaLinkConfig(enable_llm=False)

# Step 2 - Create and wire the app
app = CalmaLinkApp(config)
app.initialize()

# Step 3 - Run the labelled conversations
results = run_evaluation(app, EVAL_CASES)

for r in results:
    print(f"{r['id']:<32} intent={r['intent']:<22} language={r['language']} tool={r['has_tool']}")
print("-" * 50)

# Step 4 - Report
for name, value in calculate_metrics(results, EVAL_CASES).items():
    print(f"{name}: {value}")
