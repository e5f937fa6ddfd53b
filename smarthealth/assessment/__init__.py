"""
Risk assessment core for the Smart Health backend.

Design intent:
- Turn a prediction label plus vitals into classification, score and advisory.
- Keep the keyword and weighting rules stable, edge cases included, so stored history stays comparable.
- Never perform I/O; callers inject labels and persist records.
"""
