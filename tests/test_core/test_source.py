"""序列化能力模块单元测试."""

import pytest
from elasticsearch.dsl import A, Q

from aggflow import FiltersAggregation
from aggflow.core.source import RawAggregation, RawQuery, Serializable, serialize
from aggflow.exceptions import AggFlowError, SerializationError


class TestSerializable:
    """Serializable 协议测试."""

    def test_dsl_objects_are_serializable(self) -> None:
        """测试 Q / A 对象满足协议."""
        assert isinstance(Q("term", body="error"), Serializable)
        assert isinstance(A("terms", field="host"), Serializable)

    def test_builder_is_serializable(self) -> None:
        """测试 FiltersAggregation 满足协议."""
        assert isinstance(FiltersAggregation(), Serializable)

    def test_plain_object_is_not_serializable(self) -> None:
        """测试普通对象不满足协议."""
        assert not isinstance(object(), Serializable)


class TestRawQuery:
    """RawQuery / RawAggregation 测试."""

    def test_to_dict(self) -> None:
        """测试原样输出 DSL."""
        raw = RawQuery({"term": {"body": "error"}})
        assert raw.to_dict() == {"term": {"body": "error"}}

    def test_to_dict_returns_copy(self) -> None:
        """测试修改输出不会影响原始 DSL."""
        raw = RawQuery({"terms": {"level": ["error", "fatal"]}})
        raw.to_dict()["terms"]["level"].append("debug")
        assert raw.to_dict() == {"terms": {"level": ["error", "fatal"]}}

    def test_source_copied_on_init(self) -> None:
        """测试初始化后修改源字典不会影响 RawQuery."""
        source = {"match_all": {}}
        raw = RawQuery(source)
        source["match_none"] = {}
        assert raw.to_dict() == {"match_all": {}}

    def test_equality(self) -> None:
        """测试相等性比较."""
        assert RawQuery({"a": 1}) == RawQuery({"a": 1})
        assert RawQuery({"a": 1}) != RawQuery({"a": 2})
        assert RawQuery({"a": 1}) != RawAggregation({"a": 1})

    def test_repr(self) -> None:
        """测试 repr."""
        assert repr(RawAggregation({"avg": {}})) == "RawAggregation({'avg': {}})"


class TestSerialize:
    """serialize 函数测试."""

    def test_serialize_object(self) -> None:
        """测试调用对象的 to_dict."""
        assert serialize(Q("term", body="error")) == {"term": {"body": "error"}}

    def test_serialize_dict_with_shortcut(self) -> None:
        """测试字典通过 shortcut 展开."""
        assert serialize({"term": {"body": "error"}}, Q) == {
            "term": {"body": "error"}
        }
        assert serialize({"avg": {"field": "latency"}}, A) == {
            "avg": {"field": "latency"}
        }

    def test_serialize_dict_without_shortcut(self) -> None:
        """测试没有 shortcut 时字典不可序列化."""
        with pytest.raises(SerializationError, match="dict"):
            serialize({"term": {"body": "error"}})

    def test_serialize_unsupported_type(self) -> None:
        """测试不支持的类型抛出 SerializationError."""
        with pytest.raises(SerializationError, match="缺少 to_dict"):
            serialize(42, Q)

    def test_to_dict_error_propagates(self) -> None:
        """测试 to_dict 抛出的异常原样传播."""

        class Broken:
            def to_dict(self):
                raise RuntimeError("broken")

        with pytest.raises(RuntimeError, match="broken"):
            serialize(Broken())

    def test_serialization_error_is_package_error(self) -> None:
        """测试 SerializationError 继承自包基础异常."""
        assert issubclass(SerializationError, AggFlowError)
