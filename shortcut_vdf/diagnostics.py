"""解码诊断事件.

解码器在遇到结构性事件时通知可选的诊断接收器 (sink).
接收器只负责观察, 不会影响解码结果.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

EventKind = Literal[
    "root",
    "entry_begin",
    "entry_end",
    "property",
    "nested_skip",
    "empty_index",
    "end",
]


@dataclass(frozen=True)
class DecodeEvent:
    """传递给诊断接收器的结构性事件.

    Attributes:
        kind: 事件种类.
        pos: 事件发生时游标的偏移量.
        message: 人类可读的描述.
        loc: 事件所在的位置路径 (条目索引, 属性名).
    """

    kind: EventKind
    pos: int
    message: str = ""
    loc: tuple[str, ...] = ()


DiagnosticSink = Callable[[DecodeEvent], None]


@dataclass
class DiagnosticCollector:
    """把所有事件收集到列表中的诊断接收器.

    Examples:
        >>> collector = DiagnosticCollector()
        >>> registry = loads(data, sink=collector)
        >>> collector.of_kind("nested_skip")
    """

    events: list[DecodeEvent] = field(default_factory=list)

    def __call__(self, event: DecodeEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> list[DecodeEvent]:
        """返回指定种类的事件."""
        return [e for e in self.events if e.kind == kind]

    def clear(self) -> None:
        self.events.clear()
