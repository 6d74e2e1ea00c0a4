"""Guard evaluation for resource preconditions.

Responsibilities:
  - Decide whether a resource action runs (only_if / not_if).
  - Evaluate block guards against throwaway anonymous resources.
  - Must not mutate the invoking resource while evaluating its guards.
"""
