"""
Pytest configuration and shared fixtures for Secrets Sync tests.

Uses moto to mock AWS Systems Manager for safe, isolated testing without real
AWS credentials. Tests never import secrets_sync or scrubbing.bootstrap
in-process: importing them installs the interceptor into the test runner, so
those are exercised in a subprocess instead.
"""

import io
import logging
import os
import subprocess
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Add parent directory to path for package imports
sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def set_aws_credentials():
    """
    Set mock AWS credentials for moto.
    This runs automatically before each test.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_REGION"] = "us-east-1"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    yield


@pytest.fixture
def pipeline():
    """A fresh pipeline, isolated from the process-wide one."""
    from scrubbing import RedactionPipeline

    return RedactionPipeline()


@pytest.fixture
def fake_streams(monkeypatch):
    """
    Replace sys.stdout/sys.stderr with StringIO buffers and restore every hook
    an interceptor patches (streams, record factory, excepthook).
    """
    stdout, stderr = io.StringIO(), io.StringIO()
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(sys, "stderr", stderr)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    factory = logging.getLogRecordFactory()
    yield stdout, stderr
    logging.setLogRecordFactory(factory)


@pytest.fixture
def run_python(tmp_path):
    """
    Run Python code in a fresh interpreter with the repo on PYTHONPATH.

    Returns a function (code or argv list, **kwargs) -> CompletedProcess.
    The working directory defaults to tmp_path so no stray env-config.yml
    is picked up.
    """
    def run(args, cwd=None, input=None, env=None):
        environment = {
            key: value for key, value in os.environ.items()
            if not key.startswith("SECRETS_SYNC")
        }
        environment["PYTHONPATH"] = ROOT + os.pathsep + environment.get("PYTHONPATH", "")
        environment["PYTHONIOENCODING"] = "utf-8"
        environment.update(env or {})

        argv = [sys.executable, "-c", args] if isinstance(args, str) else [sys.executable, *args]
        return subprocess.run(
            argv,
            cwd=cwd or tmp_path,
            input=input,
            capture_output=True,
            text=True,
            env=environment,
            timeout=60,
        )

    return run
