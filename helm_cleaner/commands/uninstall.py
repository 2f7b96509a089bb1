from helm_cleaner.helm_ops import helm_uninstall, list_releases
from helm_cleaner.kube import delete_namespace, list_release_secrets
from helm_cleaner.prompts import confirm, select_releases


def _discover(args) -> list[str]:
    if args.from_secrets:
        return list_release_secrets(args.namespace, kube_context=args.kube_context)

    return list_releases(namespace=args.namespace, kube_context=args.kube_context, verbose=args.verbose)


def _print_plan(selected: list[str], namespace: str, delete_namespace: bool) -> None:
    if len(selected) == 1:
        print(f"About to uninstall release '{selected[0]}' in namespace '{namespace}'.")
    else:
        print(f"About to uninstall all releases ({', '.join(selected)}) in namespace '{namespace}'.")

    if delete_namespace:
        print(f"⚠️  Namespace '{namespace}' will also be deleted.")


def cmd_uninstall(args):
    ns = args.namespace

    releases = _discover(args)
    if not releases:
        print(f"No Helm releases found in namespace '{ns}'")
        return

    if args.release:
        selected = list(dict.fromkeys(args.release))
    else:
        selected = select_releases(releases)

    if not selected:
        print("Aborted.")
        return

    if not args.force:
        _print_plan(selected, ns, args.delete_namespace)
        if not confirm("Proceed? [y/N]"):
            print("Aborted.")
            return

    # CalledProcessError on the first failure stops the run here.
    for release in selected:
        helm_uninstall(
            release,
            ns,
            wait=args.wait,
            timeout=args.timeout,
            no_hooks=args.no_hooks,
            kube_context=args.kube_context,
            dry_run=args.dry_run,
            verbose=args.verbose,
        )

    if args.delete_namespace:
        delete_namespace(ns, dry_run=args.dry_run, kube_context=args.kube_context)


def register_uninstall_command(subparsers):
    p = subparsers.add_parser("uninstall", help="Uninstall Helm releases")
    p.add_argument("-n", "--namespace", required=True, help="Kubernetes namespace")
    p.add_argument(
        "-r",
        "--release",
        action="append",
        help="Helm release name (repeatable; default: pick interactively)",
    )
    p.add_argument("--delete-namespace", action="store_true", help="Delete namespace after uninstall")
    p.add_argument("--force", action="store_true", help="Skip confirmation prompts")
    p.add_argument("--wait", action="store_true", help="Wait for resources to be deleted")
    p.add_argument("--timeout", help="Helm timeout (e.g. 5m, 2m30s)")
    p.add_argument("--no-hooks", action="store_true", help="Do not run Helm hooks")
    p.add_argument("--from-secrets", action="store_true", help="Find releases via Helm storage secrets instead of helm list")
    p.add_argument("--kube-context", help="Kubeconfig context to use")
    p.add_argument("--dry-run", action="store_true", help="Print commands without executing")
    p.add_argument("-v", "--verbose", action="store_true", help="Echo every helm command")
    p.set_defaults(func=cmd_uninstall)
