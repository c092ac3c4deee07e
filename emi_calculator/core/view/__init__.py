# emi_calculator/core/view/__init__.py
from .state import DEFAULT_PAGE_SIZE, AmortizationViewState

__all__ = ["AmortizationViewState", "DEFAULT_PAGE_SIZE"]
