"""aggflow 异常定义模块."""


class AggFlowError(Exception):
    """aggflow 基础异常类."""

    pass


class SerializationError(AggFlowError):
    """查询或聚合无法序列化为 DSL 时抛出的异常.

    自定义的过滤条件或子聚合类型也可以在自己的 ``to_dict()`` 中抛出此异常，
    构建器会原样向上传播，不做包装。
    """

    pass


class FiltersAggregationError(AggFlowError):
    """filters 聚合配置冲突异常（例如同时使用具名和匿名过滤条件）."""

    pass
