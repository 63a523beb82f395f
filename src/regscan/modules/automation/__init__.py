"""Pseudo-automation: generated tests and checklists for manual checks."""

from .pseudo import INTERACTION_STEPS, PseudoAutomationEngine

__all__ = ["INTERACTION_STEPS", "PseudoAutomationEngine"]
