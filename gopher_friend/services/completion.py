"""
Shell-completion script generation.

bash, zsh and fish are handled by click's built-in completion classes.
PowerShell and Elvish are added here as `ShellComplete` subclasses and
registered with click, so both the generated script and the runtime
completion protocol (`_GOPHER_FRIEND_COMPLETE=<shell>_complete`) work for
every supported shell.
"""
import os
from typing import List, Tuple

import click
from click.shell_completion import (
    CompletionItem,
    ShellComplete,
    add_completion_class,
    get_completion_class,
    split_arg_string,
)

from ..config import PROG_NAME

SHELLS = ("bash", "fish", "zsh", "powershell", "elvish")

_POWERSHELL_SOURCE = """\
$%(complete_func)s = {
    param($wordToComplete, $commandAst, $cursorPosition)
    $env:COMP_WORDS = $commandAst.ToString()
    $env:COMP_CWORD = $wordToComplete
    $env:%(complete_var)s = "powershell_complete"
    try {
        & %(prog_name)s | ForEach-Object {
            $type, $value, $help = $_ -split "`t", 3
            if ($type -eq "plain") {
                if (-not $help) { $help = $value }
                [System.Management.Automation.CompletionResult]::new(
                    $value, $value, "ParameterValue", $help)
            }
        }
    } finally {
        Remove-Item Env:COMP_WORDS, Env:COMP_CWORD, Env:%(complete_var)s `
            -ErrorAction SilentlyContinue
    }
}

Register-ArgumentCompleter -Native -CommandName %(prog_name)s -ScriptBlock $%(complete_func)s
"""

_ELVISH_SOURCE = """\
use str

set edit:completion:arg-completer[%(prog_name)s] = {|@words|
    set-env COMP_WORDS (str:join ' ' $words)
    set-env COMP_CWORD $words[-1]
    set-env %(complete_var)s elvish_complete
    try {
        %(prog_name)s | from-lines | each {|line|
            var type value help = (str:split "\\t" $line)
            if (eq $type plain) {
                if (eq $help '') {
                    edit:complex-candidate $value
                } else {
                    edit:complex-candidate $value &display=$value'  '$help
                }
            }
        }
    } finally {
        unset-env COMP_WORDS
        unset-env COMP_CWORD
        unset-env %(complete_var)s
    }
}
"""


class _CommandLineComplete(ShellComplete):
    """
    Completion for shells that hand over the whole command line.

    The generated script exports the command line as COMP_WORDS and the word
    under the cursor as COMP_CWORD, then reads back one
    `type<TAB>value<TAB>help` line per candidate.
    """

    def get_completion_args(self) -> Tuple[List[str], str]:
        cwords = split_arg_string(os.environ.get("COMP_WORDS", ""))
        # PowerShell drops environment variables set to an empty string.
        incomplete = os.environ.get("COMP_CWORD", "")
        args = cwords[1:]

        if incomplete and args and args[-1] == incomplete:
            args.pop()

        return args, incomplete

    def format_completion(self, item: CompletionItem) -> str:
        help_text = " ".join((item.help or "").split())
        return f"{item.type}\t{item.value}\t{help_text}"


@add_completion_class
class PowerShellComplete(_CommandLineComplete):
    """Shell completion for PowerShell."""

    name = "powershell"
    source_template = _POWERSHELL_SOURCE


@add_completion_class
class ElvishComplete(_CommandLineComplete):
    """Shell completion for Elvish."""

    name = "elvish"
    source_template = _ELVISH_SOURCE


def complete_var_for(prog_name: str) -> str:
    """Name of the environment variable click checks for completion requests."""
    return f"_{prog_name}_COMPLETE".replace("-", "_").upper()


def completion_script(cli: click.Command, shell: str, prog_name: str = PROG_NAME) -> str:
    """
    Builds the completion script of `cli` for the given shell.

    Args:
        cli: The root click command to complete.
        shell: One of SHELLS.
        prog_name: The executable name the script registers completion for.

    Raises:
        ValueError: If no completion class is registered for `shell`.
    """
    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        raise ValueError(f"Unsupported shell: {shell}")

    comp = comp_cls(cli, {}, prog_name, complete_var_for(prog_name))
    return comp.source()
