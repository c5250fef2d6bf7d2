"""Demonstrates how to enable and configure logging in treekit.

treekit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, treekit logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``TRAINING`` level
  (numeric value 25, between INFO and WARNING) surfaces training-run
  milestones and is the default. ``DEBUG`` adds every split the builder makes.
- ``log_format``: ``"short"`` shows ``time | level | message  key=value ...``;
  ``"full"`` adds the date and ``module:function:line``. DEBUG split lines are
  indented two spaces per tree level.
- ``show_splits=False`` keeps DEBUG output but drops the per-node split lines.
- Warnings: evaluating on an empty test split is logged, not raised.
"""

from treekit import Record, enable_logging, train_and_evaluate
from treekit.id3 import extract_rules
from treekit.training import evaluate

rows = [
    Record.from_mapping(
        {"grade": float(g), "course": "nursing" if g % 3 else "design", "scholarship": g % 4 == 0},
        label=0 if g < 12 else 2 if g > 20 else 1,
    )
    for g in range(1, 31)
]

with enable_logging(level="DEBUG", log_format="full"):
    run = train_and_evaluate(rows, min_samples=2, max_depth=4, seed=7)
    print(f"\nTest accuracy: {run.report.formatted_accuracy}\n")

    for rule in extract_rules(run.tree):
        print(rule)

    # An empty test split is reported as a warning
    evaluate(run.tree, [])

# Logging automatically disabled here
