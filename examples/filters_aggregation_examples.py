#!/usr/bin/env python
"""
filters 聚合示例.

演示 FiltersAggregation 的功能，包括:
- 匿名过滤条件 (add_filter / add_filters)
- 具名过滤条件 (add_named_filter)
- 子聚合 (sub_aggregation)
- 元数据 (meta)
- other 桶 (other_bucket)
- 嵌入完整请求体
"""

import json

from elasticsearch.dsl import A, Q

from aggflow import FiltersAggregation, RawQuery


def print_dsl(title: str, dsl: dict) -> None:
    """打印 DSL."""
    print(f"\n{'=' * 60}")
    print(f"📊 {title}")
    print("=" * 60)
    print(json.dumps(dsl, indent=2, ensure_ascii=False))


def example_anonymous_filters():
    """匿名过滤条件 - 每个条件一个桶，桶按添加顺序返回."""
    agg = FiltersAggregation().add_filters(
        Q("term", body="error"),
        Q("term", body="warning"),
    )
    print_dsl("匿名过滤条件", agg.build())


def example_named_filters():
    """具名过滤条件 - 响应中的桶以名称为键."""
    agg = (
        FiltersAggregation()
        .add_named_filter("errors", Q("term", body="error"))
        .add_named_filter("slow", RawQuery({"range": {"latency_ms": {"gte": 1000}}}))
        .other_bucket_key("other_messages")
    )
    print_dsl("具名过滤条件 + other 桶", agg.build())


def example_sub_aggregations():
    """子聚合 - 每个桶内按主机分组，并统计平均耗时."""
    agg = (
        FiltersAggregation({"term": {"level": "error"}}, {"term": {"level": "warning"}})
        .sub_aggregation("by_host", A("terms", field="host", size=5))
        .sub_aggregation("avg_latency", {"avg": {"field": "latency_ms"}})
        .meta({"panel": "log-levels"})
    )
    print_dsl("子聚合 + 元数据", agg.build())


def example_search_body():
    """嵌入完整请求体 - 聚合名称由调用方决定."""
    agg = FiltersAggregation(Q("term", body="error"), Q("term", body="warning"))
    body = {
        "size": 0,
        "query": Q("range", **{"@timestamp": {"gte": "now-1d"}}).to_dict(),
        "aggs": {"messages": agg.build()},
    }
    print_dsl("完整请求体", body)


if __name__ == "__main__":
    print("\n" + "🎯 aggflow filters 聚合示例 ".center(60, "="))

    example_anonymous_filters()
    example_named_filters()
    example_sub_aggregations()
    example_search_body()
