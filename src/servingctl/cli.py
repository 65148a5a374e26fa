"""命令行入口。

提供 ``revision delete`` 子命令：按顺序删除一个或多个 Revision，并逐项打印结果行。

示例:
    servingctl revision delete svc1-abcde svc1-fghij -n demo
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional

import typer
import yaml

from .clients.serving import ServingClient, create_custom_objects_api
from .commands.bulk import DeleteFn, run_bulk_delete
from .config import CliConfig, load_config, resolve_namespace
from .errors import StructuralError

logger = logging.getLogger(__name__)

app = typer.Typer(help="servingctl / Serving 平台命令行客户端")
revision_app = typer.Typer(help="管理 Revision 资源")
app.add_typer(revision_app, name="revision")


def _setup_logging(level_name: str) -> None:
    """配置根日志（输出到 stderr，避免与结果行混杂）。"""

    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level: {level_name}")
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig 仅首次生效，同进程内多次调用时仍需更新级别
    logging.getLogger().setLevel(level)


@app.callback()
def _root(
    ctx: typer.Context,
    kubeconfig: Optional[str] = typer.Option(
        None, "--kubeconfig", help="kubeconfig 文件路径（默认 $KUBECONFIG 或 ~/.kube/config）"
    ),
    context: Optional[str] = typer.Option(
        None, "--context", help="kubeconfig 上下文名（默认 current-context）"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", help="CLI 配置文件路径（默认 ~/.config/servingctl/config.yaml）"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="日志级别: DEBUG/INFO/WARNING/ERROR"
    ),
) -> None:
    """根命令：加载配置并合并全局参数，供子命令通过 ``ctx.obj`` 读取。"""

    try:
        cfg = load_config(Path(config) if config else None)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        typer.echo(f"Error: failed to load config: {exc}", err=True)
        raise typer.Exit(code=1)
    cfg = replace(
        cfg,
        kubeconfig=kubeconfig or cfg.kubeconfig,
        context=context or cfg.context,
        log_level=log_level or cfg.log_level,
    )
    _setup_logging(cfg.log_level)
    ctx.obj = cfg


def _connector(cfg: CliConfig) -> Callable[[str], DeleteFn]:
    """返回按命名空间构建单项删除能力的工厂。"""

    def connect(namespace: str) -> DeleteFn:
        api = create_custom_objects_api(kubeconfig=cfg.kubeconfig, context=cfg.context)
        return ServingClient(api, namespace).delete_revision

    return connect


@revision_app.command("delete")
def revision_delete(
    ctx: typer.Context,
    names: Optional[List[str]] = typer.Argument(
        None, metavar="NAME...", help="待删除的 Revision 名称，可指定多个"
    ),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="目标命名空间（默认取配置或 kubeconfig 上下文）"
    ),
) -> None:
    """删除一个或多个 Revision。

    参数:
        names: Revision 名称列表，按给定顺序逐个删除，允许重复。
        namespace: 目标命名空间。

    返回值:
        无；每个名称打印一行结果到标准输出。

    副作用:
        调用 K8s API 删除资源。单项失败只体现在输出行中，退出码仍为 0；
        结构性错误（未提供名称、命名空间或客户端无法建立）打印到 stderr 并以 1 退出。

    示例:
        # 删除 default 命名空间中的 Revision 'svc1-abcde'
        servingctl revision delete svc1-abcde
    """

    cfg: CliConfig = ctx.obj
    try:
        run_bulk_delete(
            names or [],
            resolve_namespace=lambda: resolve_namespace(namespace, cfg),
            connect=_connector(cfg),
            out=typer.echo,
        )
    except StructuralError as exc:
        logger.debug("revision delete aborted", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    """CLI 入口包装。

    副作用:
        调用 Typer 应用进行命令行解析与执行。
    """

    app()


if __name__ == "__main__":
    main()
