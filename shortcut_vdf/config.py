"""shortcut_vdf 配置对象."""

from dataclasses import dataclass

from .diagnostics import DiagnosticSink
from .options import VdfOption


@dataclass(frozen=True)
class VdfConfig:
    """解码配置 (不可变).

    在 API 入口层创建, 然后传递给解码器内核.

    Attributes:
        flags: 选项标志 (IntFlag).
        sink: 可选的诊断接收器.
    """

    flags: VdfOption = VdfOption.NONE
    sink: DiagnosticSink | None = None

    @classmethod
    def from_params(
        cls,
        option: VdfOption | int = VdfOption.NONE,
        sink: DiagnosticSink | None = None,
    ) -> "VdfConfig":
        """从参数构建配置对象.

        Args:
            option: VdfOption 枚举或其整数值.
            sink: 诊断接收器.

        Returns:
            VdfConfig: 配置对象.
        """
        return cls(flags=VdfOption(option), sink=sink)

    @property
    def lenient_eof(self) -> bool:
        """是否在条目/属性循环中容忍数据末尾."""
        return bool(self.flags & VdfOption.LENIENT_EOF)
