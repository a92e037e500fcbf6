"""聚合构建器模块导出."""

from aggflow.aggregations.filters import FiltersAggregation

__all__ = [
    "FiltersAggregation",
]
