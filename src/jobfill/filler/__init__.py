"""Heuristic form filling for pages without a portal template."""

from jobfill.filler.generic import FIELD_RULES, FieldRule, GenericStrategy, generic_fill

__all__ = ["FIELD_RULES", "FieldRule", "GenericStrategy", "generic_fill"]
