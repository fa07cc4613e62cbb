"""
mcp-eval Report - Outcome aggregation and result artifacts
"""

from .aggregator import ResultAggregator, SuiteSummary

__all__ = ["ResultAggregator", "SuiteSummary"]
