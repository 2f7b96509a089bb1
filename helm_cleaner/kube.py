from kubernetes import client, config
from kubernetes.client.rest import ApiException

HELM_OWNER_SELECTOR = "owner=helm"


def core_v1(kube_context: str | None = None) -> client.CoreV1Api:
    # Uses kubeconfig on your machine (KUBECONFIG or ~/.kube/config).
    config.load_kube_config(context=kube_context)
    return client.CoreV1Api()


def list_release_secrets(namespace: str, kube_context: str | None = None) -> list[str]:
    """
    Release names straight from Helm's storage secrets.

    Every revision of a release is its own secret, so names repeat;
    the set collapses them.
    """
    v1 = core_v1(kube_context)
    secrets = v1.list_namespaced_secret(
        namespace=namespace,
        label_selector=HELM_OWNER_SELECTOR,
    ).items

    names = set()
    for s in secrets:
        name = (s.metadata.labels or {}).get("name")
        if name:
            names.add(name)

    return sorted(names)


def delete_namespace(namespace: str, *, dry_run: bool = False, kube_context: str | None = None) -> None:
    if dry_run:
        print(f"> (dry-run) delete namespace {namespace}")
        return

    v1 = core_v1(kube_context)
    try:
        v1.delete_namespace(name=namespace)
    except ApiException as e:
        if e.status == 404:
            print(f"Namespace '{namespace}' not found; nothing to delete")
            return
        raise

    print(f"✅ Namespace '{namespace}' deleted")
