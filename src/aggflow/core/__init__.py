"""核心模块导出."""

from aggflow.core.source import RawAggregation, RawQuery, Serializable, serialize

__all__ = [
    "Serializable",
    "RawQuery",
    "RawAggregation",
    "serialize",
]
