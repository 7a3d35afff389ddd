"""shortcuts.vdf 解码结果的容器类型."""

from typing import Any


def _check_key(owner: str, key: Any) -> None:
    if not isinstance(key, str):
        raise TypeError(f"{owner} keys must be str, got {type(key).__name__}.")


class Entry(dict[str, str]):
    """单个快捷方式记录: 属性名 -> 值.

    字符串属性原样保存, uint32 属性保存为其十进制字符串.
    嵌套对象不会出现在 Entry 中.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """初始化 Entry 并验证所有键为 str 类型."""
        super().__init__(*args, **kwargs)
        for key in self.keys():
            _check_key("Entry", key)

    def __setitem__(self, key: str, value: str) -> None:
        """设置键值对时验证键为 str 类型."""
        _check_key("Entry", key)
        super().__setitem__(key, value)

    def __repr__(self) -> str:
        return f"Entry({super().__repr__()})"


class Registry(dict[str, Entry]):
    """解码后的完整快捷方式集合: 条目索引 -> Entry.

    Examples:
        >>> registry = loads(data)
        >>> registry["0"]["AppName"]
        'Test Game'
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """初始化 Registry 并验证所有键为 str 类型."""
        super().__init__(*args, **kwargs)
        for key in self.keys():
            _check_key("Registry", key)

    def __setitem__(self, key: str, value: Entry) -> None:
        """设置键值对时验证键为 str 类型."""
        _check_key("Registry", key)
        super().__setitem__(key, value)

    def __repr__(self) -> str:
        return f"Registry({super().__repr__()})"

    def to_dict(self) -> dict[str, dict[str, str]]:
        """转换为普通的嵌套 dict."""
        return {index: dict(entry) for index, entry in self.items()}
