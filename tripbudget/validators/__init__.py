"""Budget validation: reconciliation verdict and the issues derived from it."""

from tripbudget.validators.budget_validator import reconcile_budget, validate_reconciliation

__all__ = ["reconcile_budget", "validate_reconciliation"]
