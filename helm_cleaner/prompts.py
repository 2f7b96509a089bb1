from typing import Callable

ALL_RELEASES = "<ALL RELEASES>"


def _parse_choices(answer: str, count: int) -> list[int] | None:
    """
    "2" or "1, 3" -> zero-based indices; None if anything is out of range.
    """
    picked: list[int] = []
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            n = int(part)
        except ValueError:
            return None
        if not 1 <= n <= count:
            return None
        if n - 1 not in picked:
            picked.append(n - 1)
    return picked or None


def select_releases(releases: list[str], *, input_fn: Callable[[str], str] | None = None) -> list[str]:
    """
    Numbered menu of releases plus a trailing <ALL RELEASES> entry.

    Empty input picks the first entry, a comma-separated list picks several
    and "q" cancels (empty result).
    """
    input_fn = input_fn or input
    options = list(releases) + [ALL_RELEASES]

    print("\nReleases:")
    for i, name in enumerate(options, 1):
        print(f"  {i}. {name}")

    while True:
        try:
            answer = input_fn(f"\nSelect a release to uninstall [1-{len(options)}]: ").strip()
        except EOFError:
            return []

        if answer.lower() in ("q", "quit"):
            return []

        picked = _parse_choices(answer, len(options)) if answer else [0]
        if picked is None:
            print(f"Please enter numbers between 1 and {len(options)}, separated by commas")
            continue

        if len(options) - 1 in picked:
            return list(releases)
        return [options[i] for i in sorted(picked)]


def confirm(prompt: str, *, input_fn: Callable[[str], str] | None = None) -> bool:
    input_fn = input_fn or input
    try:
        answer = input_fn(f"{prompt} ").strip().lower()
    except EOFError:
        return False
    return answer in ("y", "yes")
