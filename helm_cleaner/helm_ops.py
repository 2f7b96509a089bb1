import json
import os
import subprocess


class HelmOutputError(RuntimeError):
    pass


def _should_print(verbose: bool) -> bool:
    # Env var lets you turn on logs without changing CLI flags.
    return verbose or os.getenv("HELM_CLEANER_VERBOSE") == "1"


def run_cmd(
    cmd: list[str],
    *,
    dry_run: bool = False,
    capture: bool = False,
    verbose: bool = False,
):
    # Dry-run must show intent even when not verbose.
    if dry_run or _should_print(verbose):
        print(">", " ".join(cmd))

    if dry_run:
        return None

    return subprocess.run(cmd, check=True, text=True, capture_output=capture)


def helm_base(kube_context: str | None = None) -> list[str]:
    cmd = [os.getenv("HELM_CLEANER_HELM_BIN", "helm")]
    if kube_context:
        cmd += ["--kube-context", kube_context]
    return cmd


def helm_list(*, namespace: str, kube_context: str | None = None, verbose: bool = False) -> str:
    # Read-only, so it runs even under --dry-run.
    cmd = helm_base(kube_context) + ["list", "-n", namespace, "-o", "json", "--all", "--max", "0"]
    res = run_cmd(cmd, capture=True, verbose=verbose)
    return res.stdout


def parse_release_names(raw: str | None) -> list[str]:
    """
    Turn `helm list -o json` output into sorted, unique release names.

    Helm prints `[]` for an empty namespace; older versions print nothing.
    """
    if not raw or not raw.strip():
        return []
    try:
        rows = json.loads(raw)
    except json.JSONDecodeError as e:
        raise HelmOutputError(f"Could not parse helm list output: {e}") from e

    if rows is None:
        return []
    if not isinstance(rows, list):
        raise HelmOutputError("Unexpected helm list output: expected a JSON array")

    names = {row.get("name") for row in rows if isinstance(row, dict)}
    return sorted(n for n in names if n)


def list_releases(*, namespace: str, kube_context: str | None = None, verbose: bool = False) -> list[str]:
    return parse_release_names(helm_list(namespace=namespace, kube_context=kube_context, verbose=verbose))


def helm_uninstall(
    release: str,
    namespace: str,
    *,
    wait: bool = False,
    timeout: str | None = None,
    no_hooks: bool = False,
    kube_context: str | None = None,
    dry_run: bool = False,
    verbose: bool = False,
) -> None:
    cmd = helm_base(kube_context) + ["uninstall", release, "-n", namespace]

    if wait:
        cmd.append("--wait")
    if timeout:
        cmd += ["--timeout", timeout]
    if no_hooks:
        cmd.append("--no-hooks")

    print(f"Running: helm uninstall {release} -n {namespace}")
    res = run_cmd(cmd, dry_run=dry_run, verbose=verbose)
    if res is None:
        return

    print(f"✅ Release '{release}' uninstalled from '{namespace}'")
