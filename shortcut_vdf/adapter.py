"""shortcut_vdf 类型适配器.

提供类似于 Pydantic TypeAdapter 的接口,
把解码出的 Entry 验证为调用方定义的模型.
"""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter

from .api import dumps, loads
from .diagnostics import DiagnosticSink
from .options import VdfOption

T = TypeVar("T")


class RegistryAdapter(Generic[T]):
    """shortcuts.vdf 类型适配器.

    解码器只把属性名当作普通字符串键, 属性的含义由调用方的模型决定.
    整数属性在 Entry 中是十进制字符串, 交由 Pydantic 的宽松模式转换.

    Examples:
        >>> class Shortcut(BaseModel):
        ...     AppName: str
        ...     appid: int = 0
        >>> adapter = RegistryAdapter(Shortcut)
        >>> shortcuts = adapter.validate_vdf(data)
        >>> shortcuts["0"].appid
        12345
    """

    def __init__(self, type_: type[T] | Any):
        """初始化类型适配器.

        Args:
            type_: 单个条目的目标类型 (如 BaseModel 子类, dict[str, str]).
        """
        self._type = type_
        self._entry_adapter: TypeAdapter[T] = TypeAdapter(type_)
        self._registry_adapter: TypeAdapter[dict[str, T]] = TypeAdapter(
            dict[str, type_]  # type: ignore[valid-type]
        )

    def validate_vdf(
        self,
        data: bytes | bytearray | memoryview,
        *,
        option: VdfOption = VdfOption.NONE,
        sink: DiagnosticSink | None = None,
    ) -> dict[str, T]:
        """解码并验证 shortcuts.vdf 数据.

        Returns:
            条目索引 -> 验证后的对象.

        Raises:
            VdfDecodeError: 数据格式错误.
            pydantic.ValidationError: 条目不符合目标类型.
        """
        registry = loads(data, option=option, sink=sink)
        return self._registry_adapter.validate_python(registry.to_dict())

    def validate_entry(self, entry: Mapping[str, str]) -> T:
        """验证单个条目."""
        return self._entry_adapter.validate_python(dict(entry))

    def dump_vdf(self, items: Mapping[str, T]) -> bytes:
        """序列化为 shortcuts.vdf 数据.

        模型中的 `None` 字段会被省略, `int` 字段编码为 uint32 属性.
        """
        plain: dict[str, Any] = {}
        for index, item in items.items():
            if isinstance(item, BaseModel):
                plain[index] = item.model_dump(exclude_none=True)
            else:
                plain[index] = self._entry_adapter.dump_python(item, exclude_none=True)
        return dumps(plain)
