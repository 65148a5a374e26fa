"""Serving 资源访问工具。

提供：
- 读取 kube 配置并创建 CustomObjectsApi 客户端
- 将 Kubernetes API 异常翻译为 ``ApiError``（保留服务端原始消息）
- 在固定命名空间内删除 Revision 资源
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..errors import ApiError

logger = logging.getLogger(__name__)

SERVING_GROUP = "serving.knative.dev"
SERVING_VERSION = "v1"
REVISION_PLURAL = "revisions"


def create_custom_objects_api(
    kubeconfig: Optional[str] = None,
    context: Optional[str] = None,
    incluster: bool = False,
) -> Any:
    """创建 `CustomObjectsApi` 客户端。

    参数:
        kubeconfig: kubeconfig 文件路径；为 None 时使用默认位置（``$KUBECONFIG`` 或 ``~/.kube/config``）。
        context: kubeconfig 中的上下文名；为 None 时使用 current-context。
        incluster: 是否使用 in-cluster 配置；为 True 时忽略 kubeconfig 与 context。

    返回值:
        kubernetes.client.CustomObjectsApi 实例。

    副作用:
        读取 kube 配置文件或集群内服务帐号配置。
    """

    # 延迟导入以便测试时可 monkeypatch
    from kubernetes import client, config  # type: ignore[import-untyped]

    if incluster:
        config.load_incluster_config()
    else:
        config.load_kube_config(config_file=kubeconfig, context=context)
    return client.CustomObjectsApi()


def api_error_message(exc: Any) -> str:
    """从 Kubernetes ``ApiException`` 中提取面向用户的错误消息。

    优先使用响应体 Status 对象的 ``message`` 字段（例如
    ``revisions.serving.knative.dev "x" not found``），其次为 ``reason``，
    最后退化为 ``(<status>) request failed``。

    参数:
        exc: ``kubernetes.client.exceptions.ApiException`` 或具有 ``status``/``reason``/``body`` 属性的对象。

    返回值:
        str: 错误消息，不带结尾标点处理。

    副作用:
        无。
    """

    body = getattr(exc, "body", None)
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if body:
        try:
            payload = json.loads(body)
        except (TypeError, ValueError):
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
    reason = getattr(exc, "reason", None)
    if reason:
        return str(reason)
    return f"({getattr(exc, 'status', None)}) request failed"


class ServingClient:
    """绑定单一命名空间的 Serving API 客户端。"""

    def __init__(self, api: Any, namespace: str) -> None:
        self.api = api
        self.namespace = namespace

    def delete_revision(self, name: str) -> None:
        """删除当前命名空间中的指定 Revision。

        参数:
            name: Revision 名称。

        返回值:
            None。

        副作用:
            调用 K8s API `delete_namespaced_custom_object`；失败时抛出 ``ApiError``。
            名称为空时直接抛出 ``ApiError``，不发起请求（空名称会落到集合 URL 上）。
        """

        from kubernetes.client.exceptions import ApiException  # type: ignore[import-untyped]

        if not name:
            raise ApiError("resource name may not be empty")
        logger.debug("deleting revision %s/%s", self.namespace, name)
        try:
            self.api.delete_namespaced_custom_object(
                group=SERVING_GROUP,
                version=SERVING_VERSION,
                namespace=self.namespace,
                plural=REVISION_PLURAL,
                name=name,
            )
        except ApiException as exc:
            raise ApiError(
                api_error_message(exc),
                status=getattr(exc, "status", None),
                reason=getattr(exc, "reason", None),
            ) from exc
