"""aggflow - Elasticsearch 聚合构建工具包.

用于构建 Elasticsearch 聚合请求中的聚合体 DSL。

主要功能:
    - FiltersAggregation: 构建 filters 桶聚合（每个过滤条件一个桶）
    - RawQuery / RawAggregation: 包装原始 DSL 字典

使用示例:
    from elasticsearch.dsl import Q
    from aggflow import FiltersAggregation

    agg = FiltersAggregation()
    agg.add_filters(Q("term", body="error"), Q("term", body="warning"))
    body = {"aggs": {"messages": agg.build()}}
"""

__version__ = "0.1.0"

# 导出构建器
from aggflow.aggregations import FiltersAggregation

# 导出核心组件
from aggflow.core import RawAggregation, RawQuery, Serializable, serialize

# 导出异常
from aggflow.exceptions import (
    AggFlowError,
    FiltersAggregationError,
    SerializationError,
)

__all__ = [
    # 版本
    "__version__",
    # 构建器
    "FiltersAggregation",
    # 核心组件
    "Serializable",
    "RawQuery",
    "RawAggregation",
    "serialize",
    # 异常
    "AggFlowError",
    "SerializationError",
    "FiltersAggregationError",
]
