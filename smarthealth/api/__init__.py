"""
HTTP boundary for the Smart Health backend.

Design intent:
- Keep API orchestration thin and typed.
- Delegate scoring to the assessment core and I/O to internal_core collaborators.
"""
