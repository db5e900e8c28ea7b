"""TriPlan - 32-week triathlon training plan tracker."""

__version__ = "0.1.0"
