"""批量单项命令执行器。

对用户提供的每个名称依次执行单项删除操作：
- 严格按输入顺序串行执行，单项失败不影响后续项；
- 每项产生一条确定性的结果行；
- 仅结构性错误（无名称、命名空间/客户端无法建立）通过异常向上传播。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import (
    ClientConstructionError,
    NamespaceResolutionError,
    NoIdentifiersError,
)

logger = logging.getLogger(__name__)

DeleteFn = Callable[[str], None]

SUCCESS_TEMPLATE = "Revision '{name}' successfully deleted in namespace '{namespace}'."


@dataclass(frozen=True)
class DeleteOutcome:
    """单项删除结果。

    属性:
        identifier: 资源名称。
        namespace: 执行删除时所在的命名空间。
        message: 失败时为错误消息原文；成功时为 None。
    """

    identifier: str
    namespace: str
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.message is None

    def render(self) -> str:
        """渲染结果行（不含换行符）。

        失败行在错误消息后无条件追加一个句点，即使消息本身已以标点结尾。
        """

        if self.message is None:
            return SUCCESS_TEMPLATE.format(name=self.identifier, namespace=self.namespace)
        return f"{self.message}."


def execute(
    identifiers: Sequence[str], namespace: str, delete_one: DeleteFn
) -> List[DeleteOutcome]:
    """对每个名称依次执行删除并收集结果。

    参数:
        identifiers: 资源名称序列（保持顺序，允许重复）。
        namespace: 本次调用的命名空间，仅用于结果渲染。
        delete_one: 单项删除能力；失败时抛出异常，异常文本即为失败消息。

    返回值:
        List[DeleteOutcome]: 与输入等长、同序的结果列表。

    副作用:
        调用 ``delete_one``；输入为空时抛出 ``NoIdentifiersError`` 且不发起任何调用。
    """

    return list(iter_execute(identifiers, namespace, delete_one))


def iter_execute(
    identifiers: Sequence[str], namespace: str, delete_one: DeleteFn
) -> Iterable[DeleteOutcome]:
    """``execute`` 的惰性版本，每完成一项即产出一个结果。"""

    if not identifiers:
        raise NoIdentifiersError()
    return _iter_outcomes(list(identifiers), namespace, delete_one)


def _iter_outcomes(
    identifiers: List[str], namespace: str, delete_one: DeleteFn
) -> Iterable[DeleteOutcome]:
    for name in identifiers:
        try:
            delete_one(name)
        except Exception as exc:  # noqa: BLE001 - 单项失败只体现在结果行
            logger.debug("delete %s/%s failed: %s", namespace, name, exc)
            yield DeleteOutcome(name, namespace, str(exc))
        else:
            logger.debug("delete %s/%s succeeded", namespace, name)
            yield DeleteOutcome(name, namespace)


def run_bulk_delete(
    identifiers: Sequence[str],
    resolve_namespace: Callable[[], str],
    connect: Callable[[str], DeleteFn],
    out: Optional[Callable[[str], None]] = None,
) -> List[DeleteOutcome]:
    """完整的一次批量删除调用：校验 → 解析命名空间 → 构建客户端 → 逐项删除。

    参数:
        identifiers: 资源名称序列。
        resolve_namespace: 命名空间解析函数。
        connect: 根据命名空间构建单项删除能力的工厂。
        out: 可选的行输出函数；每完成一项即输出一行。

    返回值:
        List[DeleteOutcome]: 全部结果；即使所有项均失败也正常返回。

    副作用:
        前置条件不满足时抛出 ``StructuralError`` 子类，此时不会发起任何删除。
    """

    if not identifiers:
        raise NoIdentifiersError()
    try:
        namespace = resolve_namespace()
    except Exception as exc:
        raise NamespaceResolutionError(f"failed to resolve namespace: {exc}") from exc
    try:
        delete_one = connect(namespace)
    except Exception as exc:
        raise ClientConstructionError(f"failed to create serving client: {exc}") from exc

    outcomes: List[DeleteOutcome] = []
    for outcome in iter_execute(identifiers, namespace, delete_one):
        outcomes.append(outcome)
        if out is not None:
            out(outcome.render())
    failed = sum(1 for o in outcomes if not o.ok)
    logger.info(
        "revision delete finished in namespace %s: %d ok, %d failed",
        namespace,
        len(outcomes) - failed,
        failed,
    )
    return outcomes


def render_outcomes(outcomes: Iterable[DeleteOutcome]) -> str:
    """将结果渲染为完整输出文本（每行以换行结尾）。"""

    return "".join(f"{o.render()}\n" for o in outcomes)
