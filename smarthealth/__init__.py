"""
Smart Health backend package.

Design intent:
- Keep the risk classification and scoring core pure and synchronous.
- Reach the prediction model and the history store only through explicit boundaries.
- Let the API layer own all mutable session state.
"""
