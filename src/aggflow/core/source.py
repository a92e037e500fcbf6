"""DSL 序列化能力模块.

构建器只依赖一种能力：对象能够通过 ``to_dict()`` 生成自身的 DSL 片段。
``elasticsearch.dsl`` 的 Q / A 对象天然满足该约定。
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from aggflow.exceptions import SerializationError
from aggflow.typing import SourceDict


@runtime_checkable
class Serializable(Protocol):
    """可序列化为 DSL 片段的对象协议.

    任何实现了 ``to_dict()`` 的对象都可以作为过滤条件或子聚合，
    序列化失败时直接抛出异常即可。
    """

    def to_dict(self) -> Any: ...


class RawQuery:
    """
    原始查询 DSL.

    用于包装无法（或不便）用 Q 对象表达的查询字典。

    使用示例:
        RawQuery({"term": {"body": "error"}})
    """

    def __init__(self, source: Mapping[str, Any]):
        self._source = dict(source)

    def to_dict(self) -> SourceDict:
        # 返回深拷贝，调用方修改构建结果不会影响原始 DSL
        return copy.deepcopy(self._source)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._source == other._source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r})"


class RawAggregation(RawQuery):
    """
    原始聚合 DSL.

    使用示例:
        RawAggregation({
            "date_histogram": {"field": "timestamp", "calendar_interval": "1d"},
        })
    """


def serialize(
    value: Any,
    shortcut: Callable[[Mapping[str, Any]], Serializable] | None = None,
) -> Any:
    """
    将查询或聚合对象序列化为 DSL.

    Args:
        value: 实现了 to_dict() 的对象，或在提供 shortcut 时的 DSL 字典
        shortcut: 字典展开函数，如 elasticsearch.dsl 的 Q 或 A

    Returns:
        对象的 DSL 片段

    Raises:
        SerializationError: 对象既不可序列化也无法通过 shortcut 展开时抛出

    说明:
        to_dict() 或 shortcut 自身抛出的异常原样传播，不做包装。
    """
    if isinstance(value, Mapping) and shortcut is not None:
        value = shortcut(value)

    to_dict = getattr(value, "to_dict", None)
    if not callable(to_dict):
        raise SerializationError(
            f"无法序列化类型为 {type(value).__name__} 的对象: 缺少 to_dict() 方法"
        )
    return to_dict()
