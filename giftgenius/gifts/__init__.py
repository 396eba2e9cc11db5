"""
Gift recommendation engine.

Responsibilities:
- Turn a questionnaire profile into a structured search specification.
- Fan keyword queries out to every storefront provider concurrently.
- Score and rank the flattened candidates using deterministic heuristics.
- Truncate to the result volume granted by the user's plan.
"""
