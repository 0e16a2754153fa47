"""Interactive shell for Bamya. Uses cmd as backend."""

import cmd
import logging
import sys
from typing import List

from termcolor import colored

from .environment import Environment
from .evaluator import Evaluator
from .objects import is_error
from .runtime import parse

logger = logging.getLogger(__name__)

PROMPT = "> "
SHELL_COMMANDS = ("exit", "EOF")

BAMYA = "\n".join([
    '        ___----""""\\-__',
    '_,-""""---------------|\\/\\\\-____',
    '´"-___----------------|/\\//---/',
    '      """---_________//"""',
])


class BamyaShell(cmd.Cmd):
    """Bamya interpreter shell."""
    intro = "Bamya interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = PROMPT

    def __init__(self, color=True, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.color = color
        self.env = Environment()
        self.evaluator = Evaluator(output=self._write)

    def _write(self, text: str):
        self.stdout.write(text + "\n")

    def _paint(self, text: str, colour: str) -> str:
        return colored(text, colour, attrs=["bold"]) if self.color else text

    def default(self, line):
        """Parses and evaluates one line of Bamya."""
        program, errors = parse(line)
        if errors:
            self.print_parse_errors(errors)
            return

        evaluated = self.evaluator.evaluate(program, self.env)
        if evaluated is None:
            return

        text = evaluated.inspect()
        self._write(self._paint(text, "red") if is_error(evaluated) else text)

    def print_parse_errors(self, errors: List[str]):
        """Writes parser errors under the bamya banner."""
        logger.debug("rejected line with %d parse error(s)", len(errors))
        out = "-----------------------------\nWe ran into some bamya here!\n"
        out += BAMYA + "\n\n"
        out += "Parser errors:\n"
        for msg in errors:
            out += f"\t{msg}\n"
        sys.stderr.write(self._paint(out, "yellow"))

    def onecmd(self, line):
        """Runs exit/EOF as commands; every other line is Bamya source."""
        stripped = line.strip()
        if not stripped:
            return self.emptyline()
        if stripped in SHELL_COMMANDS:
            return super().onecmd(stripped)
        return self.default(line)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self._write("")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        self._write("Exiting.")
        return True


__all__ = ['BamyaShell', 'PROMPT']
