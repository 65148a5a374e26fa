"""配置加载与命名空间解析。

提供从 YAML 文件加载 CLI 配置的基础工具，以及按优先级解析本次调用的命名空间：
``--namespace`` 参数 > 配置文件 ``namespace`` > kubeconfig 上下文命名空间 > ``default``。

副作用:
    仅进行文件读取与反序列化，无外部系统交互。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, cast

import yaml

DEFAULT_NAMESPACE = "default"
CONFIG_ENV = "SERVINGCTL_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/servingctl/config.yaml")


@dataclass
class CliConfig:
    """CLI 配置模型。

    属性:
        kubeconfig: kubeconfig 文件路径；None 表示使用 kubernetes 客户端默认位置。
        context: kubeconfig 上下文名；None 表示 current-context。
        namespace: 默认命名空间；None 表示回退到 kubeconfig 上下文。
        log_level: 日志级别名（如 ``WARNING``/``DEBUG``）。
    """

    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    namespace: Optional[str] = None
    log_level: str = "WARNING"


def _read_yaml(path: Path) -> Dict[str, Any]:
    """读取 YAML 文件为字典。

    参数:
        path: YAML 文件路径。

    返回值:
        dict: 解析后的字典；空文件返回空字典。

    副作用:
        文件 IO 读取；顶层不是映射时抛出 ValueError。
    """

    with path.open("r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"config file must contain a mapping: {path}")
    return cast(Dict[str, Any], loaded)


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def load_config(path: Optional[Path] = None) -> CliConfig:
    """加载 CLI 配置。

    参数:
        path: 配置文件路径；缺省依次尝试 ``$SERVINGCTL_CONFIG`` 与
            ``~/.config/servingctl/config.yaml``。

    返回值:
        CliConfig: 配置对象；文件不存在时返回默认值。

    副作用:
        读取文件系统与环境变量。
    """

    if path is None:
        env_path = os.environ.get(CONFIG_ENV)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    path = path.expanduser()
    if not path.exists():
        return CliConfig()
    data = _read_yaml(path)
    return CliConfig(
        kubeconfig=_opt_str(data.get("kubeconfig")),
        context=_opt_str(data.get("context")),
        namespace=_opt_str(data.get("namespace")),
        log_level=str(data.get("log_level") or "WARNING").upper(),
    )


def kubeconfig_namespace(
    kubeconfig: Optional[str] = None, context: Optional[str] = None
) -> Optional[str]:
    """读取 kubeconfig 中选定上下文的命名空间。

    参数:
        kubeconfig: kubeconfig 文件路径；None 时使用客户端默认位置。
        context: 上下文名；None 时使用 current-context。

    返回值:
        Optional[str]: 上下文中配置的命名空间；未配置时为 None。

    副作用:
        读取 kubeconfig；文件缺失或格式非法时抛出 kubernetes 客户端异常。
    """

    from kubernetes import config  # type: ignore[import-untyped]

    contexts, active = config.list_kube_config_contexts(config_file=kubeconfig)
    selected = active
    if context:
        selected = next((c for c in contexts or [] if c.get("name") == context), None)
        if selected is None:
            raise KeyError(f"context not found in kubeconfig: {context}")
    ctx = (selected or {}).get("context") or {}
    return _opt_str(ctx.get("namespace"))


def resolve_namespace(flag_namespace: Optional[str], cfg: CliConfig) -> str:
    """按优先级解析本次调用的命名空间。

    参数:
        flag_namespace: ``--namespace`` 参数值。
        cfg: 已加载的 CLI 配置。

    返回值:
        str: 命名空间。

    副作用:
        前两级均未给出时读取 kubeconfig。
    """

    if flag_namespace:
        return flag_namespace
    if cfg.namespace:
        return cfg.namespace
    return kubeconfig_namespace(cfg.kubeconfig, cfg.context) or DEFAULT_NAMESPACE
