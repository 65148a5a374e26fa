"""`revision delete` 子命令的 CLI 测试。

覆盖:
- 多个名称逐行输出，单项失败时退出码仍为 0
- 未提供名称、命名空间/客户端无法建立时退出码为 1 且不发起删除
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pytest
from kubernetes.client.exceptions import ApiException
from typer.testing import CliRunner

import servingctl.cli as cli
import servingctl.config as cfgmod
from servingctl.cli import app


class FakeCustomObjectsApi:
    def __init__(self, existing: tuple = ()) -> None:
        self.existing = set(existing)
        self.calls: List[Dict[str, Any]] = []

    def delete_namespaced_custom_object(self, **kw: Any):
        self.calls.append(kw)
        if kw["name"] not in self.existing:
            exc = ApiException(status=404, reason="Not Found")
            exc.body = json.dumps(
                {"message": f'revisions.serving.knative.dev "{kw["name"]}" not found'}
            )
            raise exc
        self.existing.discard(kw["name"])
        return {}


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SERVINGCTL_CONFIG", str(tmp_path / "missing.yaml"))


@pytest.fixture
def fake_api(monkeypatch: pytest.MonkeyPatch) -> FakeCustomObjectsApi:
    api = FakeCustomObjectsApi(existing=("hello-00001", "hello-00002"))
    monkeypatch.setattr(
        cli, "create_custom_objects_api", lambda kubeconfig=None, context=None: api
    )
    return api


def test_delete_multiple_with_one_missing(fake_api: FakeCustomObjectsApi):
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["revision", "delete", "hello-00001", "hello-00002", "hello-nonexist", "-n", "demo"],
    )
    assert result.exit_code == 0, result.output
    assert result.output == (
        "Revision 'hello-00001' successfully deleted in namespace 'demo'.\n"
        "Revision 'hello-00002' successfully deleted in namespace 'demo'.\n"
        'revisions.serving.knative.dev "hello-nonexist" not found.\n'
    )
    assert [c["name"] for c in fake_api.calls] == [
        "hello-00001",
        "hello-00002",
        "hello-nonexist",
    ]
    assert {c["namespace"] for c in fake_api.calls} == {"demo"}


def test_delete_same_name_twice(fake_api: FakeCustomObjectsApi):
    runner = CliRunner()
    result = runner.invoke(
        app, ["revision", "delete", "hello-00001", "hello-00001", "--namespace", "demo"]
    )
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Revision 'hello-00001' successfully deleted in namespace 'demo'.",
        'revisions.serving.knative.dev "hello-00001" not found.',
    ]


def test_delete_requires_names(fake_api: FakeCustomObjectsApi):
    runner = CliRunner()
    result = runner.invoke(app, ["revision", "delete", "-n", "demo"])
    assert result.exit_code == 1
    assert "'servingctl revision delete' requires the revision name(s)" in result.output
    assert fake_api.calls == []


def test_namespace_from_config_file(fake_api: FakeCustomObjectsApi, tmp_path: Path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("namespace: team-a\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["--config", str(cfg), "revision", "delete", "hello-00001"])
    assert result.exit_code == 0
    assert result.output == (
        "Revision 'hello-00001' successfully deleted in namespace 'team-a'.\n"
    )


def test_namespace_resolution_failure(
    fake_api: FakeCustomObjectsApi, monkeypatch: pytest.MonkeyPatch
):
    def broken(*_a: Any, **_kw: Any):
        raise OSError("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr(cfgmod, "kubeconfig_namespace", broken)
    runner = CliRunner()
    result = runner.invoke(app, ["revision", "delete", "hello-00001"])
    assert result.exit_code == 1
    assert "failed to resolve namespace" in result.output
    assert fake_api.calls == []


def test_client_construction_failure(monkeypatch: pytest.MonkeyPatch):
    def broken(kubeconfig=None, context=None):
        raise RuntimeError("Invalid kube-config file")

    monkeypatch.setattr(cli, "create_custom_objects_api", broken)
    runner = CliRunner()
    result = runner.invoke(app, ["revision", "delete", "hello-00001", "-n", "demo"])
    assert result.exit_code == 1
    assert "failed to create serving client" in result.output


def test_kubeconfig_and_context_forwarded(monkeypatch: pytest.MonkeyPatch):
    seen: Dict[str, Any] = {}

    def factory(kubeconfig=None, context=None):
        seen.update(kubeconfig=kubeconfig, context=context)
        return FakeCustomObjectsApi(existing=("r",))

    monkeypatch.setattr(cli, "create_custom_objects_api", factory)
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["--kubeconfig", "/tmp/kc", "--context", "prod", "revision", "delete", "r", "-n", "x"],
    )
    assert result.exit_code == 0
    assert seen == {"kubeconfig": "/tmp/kc", "context": "prod"}


def test_unknown_log_level_rejected(fake_api: FakeCustomObjectsApi):
    runner = CliRunner()
    result = runner.invoke(
        app, ["--log-level", "chatty", "revision", "delete", "r", "-n", "x"]
    )
    assert result.exit_code != 0
    assert fake_api.calls == []


def test_empty_name_not_sent_to_api(fake_api: FakeCustomObjectsApi):
    """空名称输出失败行且不调用 API，其余名称照常删除。"""

    runner = CliRunner()
    result = runner.invoke(app, ["revision", "delete", "", "hello-00001", "-n", "demo"])
    assert result.exit_code == 0
    assert result.output == (
        "resource name may not be empty.\n"
        "Revision 'hello-00001' successfully deleted in namespace 'demo'.\n"
    )
    assert [c["name"] for c in fake_api.calls] == ["hello-00001"]


@pytest.fixture
def _restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_log_level_applied_on_every_invocation(
    fake_api: FakeCustomObjectsApi, _restore_root_level: logging.Logger
):
    """同一进程内多次调用时，每次的 --log-level 都应生效。"""

    runner = CliRunner()
    for level in ("DEBUG", "ERROR"):
        result = runner.invoke(
            app, ["--log-level", level, "revision", "delete", "hello-00001", "-n", "x"]
        )
        assert result.exit_code == 0
        assert _restore_root_level.level == getattr(logging, level)


def test_delete_help_shows_example():
    runner = CliRunner()
    result = runner.invoke(app, ["revision", "delete", "--help"])
    assert result.exit_code == 0
    assert "svc1-abcde" in result.output
