"""Shared fixtures: isolated configuration and throwaway git repositories."""

import os
import shutil
import subprocess
import tempfile

import pytest

import RpmChangelog
from RpmChangelog import ConfigParser


requires_git = pytest.mark.skipif(shutil.which("git") is None,
                                  reason="git is not installed")
requires_sh = pytest.mark.skipif(not os.path.exists("/bin/sh"),
                                 reason="needs a POSIX shell")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Run every test with an empty configuration."""
    monkeypatch.setattr(RpmChangelog.config, "_config",
                        ConfigParser.ConfigParser())
    return RpmChangelog.config


@pytest.fixture
def tmpdir_root(tmp_path, monkeypatch):
    """Private directory used by tempfile, to check what is left behind."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


class GitRepo:
    """Builds commits in a scratch repository with controlled authorship."""

    def __init__(self, path, home):
        self.path = path
        self.env = dict(os.environ)
        self.env.update({
            "HOME": str(home),
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_COMMITTER_NAME": "Committer",
            "GIT_COMMITTER_EMAIL": "committer@example.com",
            "LC_ALL": "C",
        })
        path.mkdir()
        self.git("init", "-q")

    def git(self, *args):
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", *args],
            cwd=str(self.path), env=self.env, check=True,
            stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        return result.stdout.decode().strip()

    def commit(self, message, files=None, remove=(), name="Alice",
               email="alice@example.com", date="1000000000 +0000"):
        for filename, content in (files or {}).items():
            target = self.path / filename
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            self.git("add", filename)
        for filename in remove:
            self.git("rm", "-q", filename)
        self.env.update({
            "GIT_AUTHOR_NAME": name,
            "GIT_AUTHOR_EMAIL": email,
            "GIT_AUTHOR_DATE": date,
            "GIT_COMMITTER_DATE": date,
        })
        self.git("commit", "-q", "--allow-empty", "-m", message)
        return self.git("rev-parse", "HEAD")


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating an empty repository named after its argument."""
    def factory(name="pkg"):
        return GitRepo(tmp_path / name, tmp_path)
    return factory


def spec(version, release="1", extra=""):
    return ("Name: pkg\nVersion: %s\nRelease: %s\n%s" %
            (version, release, extra))


def fake_resolver(workspace):
    """Reads Version/Release straight from the spec, like rpmspec would."""
    with open(workspace.specpath) as f:
        content = f.read()
    fields = {}
    for line in content.splitlines():
        if ":" in line:
            key, value = line.split(":", 1)
            fields[key.strip()] = value.strip()
    if "Broken" in fields:
        return None, "error: line 4: Unknown tag: Broken\n"
    return "%s-%s" % (fields["Version"], fields["Release"]), None
