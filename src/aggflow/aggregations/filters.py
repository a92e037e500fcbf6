"""filters 桶聚合构建器模块."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from elasticsearch.dsl import A, Q

from aggflow.core.source import serialize
from aggflow.exceptions import FiltersAggregationError
from aggflow.typing import FiltersSource, MetaDict, SourceDict

# 模块级别日志记录器
logger = logging.getLogger(__name__)


class FiltersAggregation:
    """
    filters 桶聚合构建器.

    每个过滤条件对应一个桶，桶内收集所有命中该条件的文档。支持:
    - 匿名过滤条件（按添加顺序输出为数组）
    - 具名过滤条件（输出为 名称 -> 查询 的映射）
    - 子聚合 (aggregations)
    - 元数据 (meta)
    - other 桶 (other_bucket / other_bucket_key)

    过滤条件可以是任何实现了 to_dict() 的对象（如 elasticsearch.dsl 的 Q 对象），
    也可以是 DSL 字典，字典会通过 Q() 展开；子聚合的字典通过 A() 展开。

    使用示例:
        agg = (
            FiltersAggregation()
            .add_filter(Q("term", body="error"))
            .add_filter({"term": {"body": "warning"}})
            .sub_aggregation("by_host", A("terms", field="host"))
            .meta({"color": "blue"})
        )

        agg.build()
        # {
        #     "filters": {
        #         "filters": [
        #             {"term": {"body": "error"}},
        #             {"term": {"body": "warning"}},
        #         ]
        #     },
        #     "aggregations": {"by_host": {"terms": {"field": "host"}}},
        #     "meta": {"color": "blue"},
        # }

    注意:
        build() 只返回聚合体本身，不包含聚合名称。调用方需要自行将其放到
        {"aggs": {"<name>": ...}} 下。
    """

    def __init__(
        self,
        *filters: Any,
        other_bucket: bool | None = None,
        other_bucket_key: str | None = None,
        meta: Mapping[str, Any] | None = None,
    ):
        """
        初始化构建器.

        Args:
            *filters: 初始的匿名过滤条件
            other_bucket: 是否返回未命中任何过滤条件的文档桶
            other_bucket_key: other 桶的名称（ES 默认为 "_other_"）
            meta: 聚合元数据
        """
        self._filters: list[Any] = []
        self._named_filters: dict[str, Any] = {}
        self._sub_aggregations: dict[str, Any] = {}
        self._meta: MetaDict = {}
        self._other_bucket = other_bucket
        self._other_bucket_key = other_bucket_key

        self.add_filters(*filters)
        self.meta(meta)

    def add_filter(self, query: Any) -> FiltersAggregation:
        """
        追加一个匿名过滤条件.

        Args:
            query: Q 对象、实现了 to_dict() 的对象或 DSL 字典

        Returns:
            self，支持链式调用
        """
        self._filters.append(query)
        return self

    def add_filters(self, *queries: Any) -> FiltersAggregation:
        """
        按顺序追加多个匿名过滤条件，不传参数时不做任何修改.

        Returns:
            self，支持链式调用
        """
        if queries:
            self._filters.extend(queries)
        return self

    def add_named_filter(self, name: str, query: Any) -> FiltersAggregation:
        """
        添加具名过滤条件，同名条件会被覆盖.

        具名条件输出为映射，响应中的桶以名称作为键。不能与匿名条件混用。

        Args:
            name: 桶名称
            query: Q 对象、实现了 to_dict() 的对象或 DSL 字典

        Returns:
            self，支持链式调用

        示例:
            agg.add_named_filter("errors", Q("term", body="error"))
        """
        self._named_filters[name] = query
        return self

    def add_named_filters(self, queries: Mapping[str, Any]) -> FiltersAggregation:
        """按映射的顺序批量添加具名过滤条件."""
        for name, query in queries.items():
            self.add_named_filter(name, query)
        return self

    def sub_aggregation(self, name: str, aggregation: Any) -> FiltersAggregation:
        """
        设置子聚合，同名子聚合会被覆盖.

        Args:
            name: 子聚合名称
            aggregation: A 对象、FiltersAggregation、实现了 to_dict() 的对象或 DSL 字典

        Returns:
            self，支持链式调用
        """
        self._sub_aggregations[name] = aggregation
        return self

    def meta(self, metadata: Mapping[str, Any] | None) -> FiltersAggregation:
        """
        设置聚合元数据.

        整体替换之前的元数据，不做合并。传入 None 或空字典时清空。

        Returns:
            self，支持链式调用
        """
        self._meta = dict(metadata) if metadata else {}
        return self

    def other_bucket(self, enabled: bool | None = True) -> FiltersAggregation:
        """设置是否返回 other 桶，传入 None 时不输出该参数."""
        self._other_bucket = enabled
        return self

    def other_bucket_key(self, key: str | None) -> FiltersAggregation:
        """设置 other 桶名称，传入 None 时不输出该参数."""
        self._other_bucket_key = key
        return self

    @property
    def filters(self) -> list[Any]:
        """匿名过滤条件（副本）."""
        return list(self._filters)

    @property
    def named_filters(self) -> dict[str, Any]:
        """具名过滤条件（副本）."""
        return dict(self._named_filters)

    @property
    def sub_aggregations(self) -> dict[str, Any]:
        """子聚合（副本）."""
        return dict(self._sub_aggregations)

    @property
    def metadata(self) -> MetaDict:
        """元数据（副本）."""
        return dict(self._meta)

    def build(self) -> SourceDict:
        """
        构建聚合 DSL.

        Returns:
            {"filters": {"filters": [...]}, "aggregations": {...}, "meta": {...}}
            其中 aggregations 和 meta 仅在非空时输出

        Raises:
            FiltersAggregationError: 同时存在具名和匿名过滤条件时抛出

        说明:
            任一过滤条件或子聚合序列化失败时，异常原样抛出，不返回部分结果。
            build() 不修改构建器状态，可以重复调用。
        """
        if self._filters and self._named_filters:
            raise FiltersAggregationError(
                "filters 聚合只能使用具名或匿名过滤条件中的一种，不能混用"
            )

        logger.debug(
            f"构建 filters 聚合: 过滤条件 {len(self._filters) + len(self._named_filters)} 个, "
            f"子聚合 {len(self._sub_aggregations)} 个"
        )

        source: SourceDict = {"filters": {"filters": self._build_filters()}}

        if self._other_bucket is not None:
            source["filters"]["other_bucket"] = self._other_bucket
        if self._other_bucket_key is not None:
            source["filters"]["other_bucket_key"] = self._other_bucket_key

        if self._sub_aggregations:
            source["aggregations"] = {
                name: self._serialize(aggregation, A, f"子聚合 '{name}'")
                for name, aggregation in self._sub_aggregations.items()
            }

        if self._meta:
            source["meta"] = dict(self._meta)

        return source

    def to_dict(self) -> SourceDict:
        """
        导出为字典格式的 DSL.

        与 build() 等价，使构建器本身可以作为另一个聚合的子聚合。
        """
        return self.build()

    def clear(self) -> FiltersAggregation:
        """清空所有过滤条件、子聚合和参数."""
        self._filters.clear()
        self._named_filters.clear()
        self._sub_aggregations.clear()
        self._meta = {}
        self._other_bucket = None
        self._other_bucket_key = None
        return self

    def _build_filters(self) -> FiltersSource:
        """序列化过滤条件，具名条件输出映射，否则输出数组."""
        if self._named_filters:
            return {
                name: self._serialize(query, Q, f"过滤条件 '{name}'")
                for name, query in self._named_filters.items()
            }
        return [
            self._serialize(query, Q, f"过滤条件 #{index}")
            for index, query in enumerate(self._filters)
        ]

    def _serialize(
        self,
        value: Any,
        shortcut: Callable[[Mapping[str, Any]], Any],
        label: str,
    ) -> Any:
        """序列化单个过滤条件或子聚合，失败时记录日志后原样抛出."""
        try:
            return serialize(value, shortcut)
        except Exception as e:
            logger.debug(f"{label} 序列化失败: {e}")
            raise

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(filters={len(self._filters)}, "
            f"named_filters={len(self._named_filters)}, "
            f"sub_aggregations={list(self._sub_aggregations)})"
        )
