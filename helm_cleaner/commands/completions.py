import argparse

BASH_TEMPLATE = """\
# bash completion for {prog}
# Load with: source <({prog} completions)

{func}() {{
    local cur="${{COMP_WORDS[COMP_CWORD]}}"
    local opts

    if [[ ${{COMP_CWORD}} -eq 1 ]]; then
        opts="{top}"
    else
        case "${{COMP_WORDS[1]}}" in
{cases}
            *)
                opts=""
                ;;
        esac
    fi

    COMPREPLY=( $(compgen -W "${{opts}}" -- "${{cur}}") )
    return 0
}}

complete -F {func} {prog}
"""


def _option_strings(parser: argparse.ArgumentParser) -> list[str]:
    out: list[str] = []
    for action in parser._actions:
        out.extend(action.option_strings)
    return out


def _subcommands(parser: argparse.ArgumentParser) -> dict[str, argparse.ArgumentParser]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return dict(action.choices)
    return {}


def bash_completion(parser: argparse.ArgumentParser) -> str:
    prog = parser.prog
    subs = _subcommands(parser)

    cases = []
    for name, sub in subs.items():
        cases.append(
            f"            {name})\n"
            f"                opts=\"{' '.join(_option_strings(sub))}\"\n"
            f"                ;;"
        )

    return BASH_TEMPLATE.format(
        prog=prog,
        func="_" + prog.replace("-", "_"),
        top=" ".join(list(subs) + _option_strings(parser)),
        cases="\n".join(cases),
    )


SHELLS = {
    "bash": bash_completion,
}


def cmd_completions(args):
    print(SHELLS[args.shell](args.root_parser), end="")


def register_completions_command(subparsers, root_parser):
    p = subparsers.add_parser("completions", help="Generate bash completions")
    p.add_argument("--shell", choices=sorted(SHELLS), default="bash", help="Target shell (default: bash)")
    p.set_defaults(func=cmd_completions, root_parser=root_parser)
