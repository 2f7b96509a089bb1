import argparse
import subprocess
from importlib.metadata import PackageNotFoundError, version

from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from helm_cleaner.helm_ops import HelmOutputError

from helm_cleaner.commands.uninstall import register_uninstall_command
from helm_cleaner.commands.completions import register_completions_command

try:
    VERSION = version("helm-cleaner")
except PackageNotFoundError:
    # running from a source checkout that was never installed
    VERSION = "0+unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="helm-cleaner", description="Helm Cleaner CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    register_uninstall_command(sub)
    register_completions_command(sub, parser)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        args.func(args)
    except subprocess.CalledProcessError as e:
        # helm already wrote its own error to stderr when output wasn't captured
        detail = (e.stderr or "").strip()
        msg = f"Command failed (exit {e.returncode}): {' '.join(e.cmd)}"
        raise SystemExit(f"{msg}\n{detail}" if detail else msg) from e
    except FileNotFoundError as e:
        raise SystemExit(f"Executable not found: {e.filename}. Is helm installed and on PATH?") from e
    except HelmOutputError as e:
        raise SystemExit(str(e)) from e
    except ApiException as e:
        raise SystemExit(f"Kubernetes API error ({e.status}): {e.reason}") from e
    except ConfigException as e:
        raise SystemExit(f"Could not load kubeconfig: {e}") from e
    except KeyboardInterrupt:
        print("\nAborted.")
        raise SystemExit(130)


if __name__ == "__main__":
    main()
