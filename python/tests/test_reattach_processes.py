"""Tests for the psutil-backed process source."""

from __future__ import annotations

from types import SimpleNamespace

import psutil
import pytest

from reattach import processes
from reattach.processes import ProcessSource, pick_candidate
from reattach.target import Target


def _fake_iter(entries):
    def process_iter(attrs=None, ad_value=None):
        for info in entries:
            yield SimpleNamespace(info=dict(info))

    return process_iter


@pytest.fixture
def fake_table(monkeypatch):
    entries = [
        {"pid": 1, "exe": "/usr/lib/systemd/systemd", "name": "systemd", "username": "root"},
        {"pid": 20, "exe": None, "name": "kworker/0:1", "username": "root"},
        {"pid": 30, "exe": "/opt/app/server", "name": "server", "username": "dev"},
        {"pid": 31, "exe": "/opt/app/server", "name": "server", "username": None},
        {"pid": 40, "exe": "/opt/app/server", "name": "server", "username": "dev"},
    ]
    monkeypatch.setattr(processes.psutil, "process_iter", _fake_iter(entries))
    return entries


def test_list_targets_skips_processes_without_executable(fake_table):
    targets = ProcessSource().list_targets()
    assert [t.process_id for t in targets] == [1, 30, 31, 40]
    assert targets[1].process_name == "server"
    assert targets[2].process_user == ""


def test_list_targets_can_include_unnamed(fake_table):
    targets = ProcessSource(include_unnamed=True).list_targets()
    assert 20 in [t.process_id for t in targets]


def test_find_prefers_same_pid(fake_table):
    source = ProcessSource()
    assert source.find(Target(40, "/opt/app/server", "dev")).process_id == 40
    assert source.find(Target(99, "/opt/app/server", "dev")).process_id == 30
    assert source.find(Target(1, "/opt/app/missing", "dev")) is None


def test_find_ignores_remote_targets(fake_table):
    assert ProcessSource().find(Target(30, "/opt/app/server", "dev", "devbox")) is None


def test_get_handles_missing_and_denied(monkeypatch):
    class GoneProcess:
        def __init__(self, pid):
            raise psutil.NoSuchProcess(pid)

    monkeypatch.setattr(processes.psutil, "Process", GoneProcess)
    assert ProcessSource().get(123) is None

    class DeniedProcess:
        def __init__(self, pid):
            self.pid = pid

        def as_dict(self, attrs=None, ad_value=None):
            raise psutil.AccessDenied(self.pid)

    monkeypatch.setattr(processes.psutil, "Process", DeniedProcess)
    assert ProcessSource().get(123) is None


def test_get_builds_target(monkeypatch):
    class LiveProcess:
        def __init__(self, pid):
            self.pid = pid

        def as_dict(self, attrs=None, ad_value=None):
            return {"pid": self.pid, "exe": r"C:\bin\app.exe", "name": "app.exe", "username": r"DOMAIN\bob"}

    monkeypatch.setattr(processes.psutil, "Process", LiveProcess)
    target = ProcessSource().get(55)
    assert target == Target(0, r"C:\bin\app.exe", r"domain\BOB")
    assert target.process_id == 55
    assert target.process_name == "app.exe"


def test_pick_candidate_without_matches():
    assert pick_candidate(Target(1, "a.exe", "bob"), [Target(1, "b.exe", "bob")]) is None


def test_get_rejects_negative_pid():
    assert ProcessSource().get(-5) is None
