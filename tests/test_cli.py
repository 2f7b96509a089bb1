import subprocess
from importlib.metadata import PackageNotFoundError, version

import pytest
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from helm_cleaner.cli import VERSION, build_parser, main
from helm_cleaner.commands import uninstall
from helm_cleaner.commands.completions import _subcommands, bash_completion
from helm_cleaner.helm_ops import HelmOutputError


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == f"helm-cleaner {VERSION}"


def test_bash_completion_covers_subcommands_and_flags():
    script = bash_completion(build_parser())

    assert "complete -F _helm_cleaner helm-cleaner" in script
    assert 'opts="uninstall completions' in script
    assert "            uninstall)" in script
    for flag in ("--namespace", "--release", "--delete-namespace", "--force", "--dry-run"):
        assert flag in script


def test_completions_command_prints_script(capsys):
    main(["completions"])

    assert capsys.readouterr().out.startswith("# bash completion for helm-cleaner")


def _raise_from_listing(monkeypatch, error):
    def boom(**kwargs):
        raise error

    monkeypatch.setattr(uninstall, "list_releases", boom)


def test_missing_helm_binary(monkeypatch):
    _raise_from_listing(monkeypatch, FileNotFoundError(2, "No such file", "helm"))

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging"])

    assert "Executable not found: helm" in exc.value.code


def test_unparseable_helm_output(monkeypatch):
    _raise_from_listing(monkeypatch, HelmOutputError("Could not parse helm list output"))

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging"])

    assert exc.value.code == "Could not parse helm list output"


def test_kubernetes_api_error(monkeypatch):
    _raise_from_listing(monkeypatch, ApiException(status=403, reason="Forbidden"))

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging"])

    assert exc.value.code == "Kubernetes API error (403): Forbidden"


def test_ctrl_c(monkeypatch, capsys):
    _raise_from_listing(monkeypatch, KeyboardInterrupt())

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging"])

    assert exc.value.code == 130
    assert "Aborted." in capsys.readouterr().out


def test_version_comes_from_package_metadata():
    try:
        expected = version("helm-cleaner")
    except PackageNotFoundError:
        expected = "0+unknown"

    assert VERSION == expected


def test_bash_completion_has_a_case_for_every_subcommand():
    parser = build_parser()
    subs = _subcommands(parser)
    script = bash_completion(parser)

    assert set(subs) == {"uninstall", "completions"}
    for name, sub in subs.items():
        assert f"            {name})\n" in script
        for flag in (s for a in sub._actions for s in a.option_strings):
            assert flag in script


def test_completions_shell_flag(capsys):
    main(["completions", "--shell", "bash"])
    assert "complete -F _helm_cleaner helm-cleaner" in capsys.readouterr().out

    with pytest.raises(SystemExit) as exc:
        main(["completions", "--shell", "fish"])
    assert exc.value.code == 2


def test_helm_stderr_is_shown(monkeypatch):
    cmd = ["helm", "list", "-n", "staging", "-o", "json", "--all", "--max", "0"]
    _raise_from_listing(monkeypatch, subprocess.CalledProcessError(1, cmd, stderr="Error: forbidden\n"))

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging"])

    assert exc.value.code == f"Command failed (exit 1): {' '.join(cmd)}\nError: forbidden"


def test_bad_kubeconfig(monkeypatch):
    _raise_from_listing(monkeypatch, ConfigException("Invalid kube-config file"))

    with pytest.raises(SystemExit) as exc:
        main(["uninstall", "-n", "staging", "--kube-context", "nope"])

    assert exc.value.code == "Could not load kubeconfig: Invalid kube-config file"
