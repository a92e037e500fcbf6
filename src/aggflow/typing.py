"""aggflow 类型定义模块."""

from typing import Any, Dict, List, Union

# 单个 DSL 片段，例如 {"term": {"body": "error"}}
SourceDict = Dict[str, Any]

# filters 聚合中 "filters" 键的取值：匿名列表或具名映射
FiltersSource = Union[List[Any], Dict[str, Any]]

# 聚合元数据，原样回传到聚合响应中
MetaDict = Dict[str, Any]
