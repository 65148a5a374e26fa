"""servingctl / Serving 平台命令行客户端包。

该包包含 revision 资源的批量删除命令、Serving API 客户端适配层，以及命名空间与配置解析。
"""

__all__ = ["__version__", "get_version"]

__version__ = "0.1.0"


def get_version() -> str:
    """返回当前包版本号。

    返回值:
        str: 版本号字符串，例如 "0.1.0"。
    副作用:
        无副作用，仅读取内置常量。
    """

    return __version__
