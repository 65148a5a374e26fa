"""servingctl 异常体系。

分为两类互不相交的错误：
- 结构性错误（StructuralError）：批处理开始前即失败，向调用方传播并以非零退出码结束；
- 单项 API 错误（ApiError）：单个资源操作失败，由批处理执行器捕获并折叠为该项的输出行。
"""

from __future__ import annotations

from typing import Optional


class ServingctlError(Exception):
    """servingctl 所有异常的基类。"""


class StructuralError(ServingctlError):
    """调用级错误：参数缺失、命名空间或客户端无法建立。"""


class NoIdentifiersError(StructuralError):
    """未提供任何资源名称。"""

    def __init__(self, command: str = "servingctl revision delete") -> None:
        super().__init__(f"'{command}' requires the revision name(s)")
        self.command = command


class NamespaceResolutionError(StructuralError):
    """命名空间解析失败（原始异常保存在 ``__cause__``）。"""


class ClientConstructionError(StructuralError):
    """客户端构建失败（原始异常保存在 ``__cause__``）。"""


class ApiError(ServingctlError):
    """单项 API 调用失败。

    属性:
        status: HTTP 状态码（未知时为 None）。
        reason: HTTP 原因短语（如 ``Not Found``）。

    ``str(err)`` 为 API 服务端返回的原始消息，不附加任何前缀。
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason
