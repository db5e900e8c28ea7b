"""HTTP API for TriPlan."""
