"""CLI Utility Functions"""

import re
import shutil
import subprocess
import sys
from typing import Optional

from ai_commits.output import bold, dim, info

FENCE_RE = re.compile(r'^```.*$')


def clean_message(text: str) -> str:
    """Strip code fences and surrounding blank lines from provider output.

    Blank lines inside the message are kept. Running it twice changes nothing.
    """
    lines = [line for line in text.splitlines() if not FENCE_RE.match(line)]

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = len(lines)
    while end > start and not lines[end - 1].strip():
        end -= 1

    return '\n'.join(lines[start:end])


def write_output(text: str, path: Optional[str] = None) -> None:
    """Send the final text to stdout, or to a file with one trailing newline."""
    if path is None:
        print(text)
        return
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text + '\n')


class TerminalChooser:
    """Pick one of several strings with gum or fzf, or a numbered menu."""

    def _run(self, argv: list[str], options: list[str]) -> Optional[str]:
        # gum and fzf draw on the terminal and print only the choice on stdout
        try:
            result = subprocess.run(
                argv,
                input='\n'.join(options) + '\n',
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def choose(self, options: list[str], header: str) -> Optional[str]:
        if shutil.which('gum'):
            return self._run(['gum', 'choose', '--header', header], options)
        if shutil.which('fzf'):
            return self._run(['fzf', '--height=20%', '--layout=reverse', '--border', f'--prompt={header} > '], options)
        return self._numbered_menu(options, header)

    def filter(self, options: list[str], placeholder: str, initial: str = "") -> Optional[str]:
        """Searchable pick. Returns None when no filter tool is installed."""
        if shutil.which('gum'):
            return self._run(['gum', 'filter', '--placeholder', placeholder, '--value', initial], options)
        if shutil.which('fzf'):
            return self._run(['fzf', '--height=40%', '--layout=reverse', f'--prompt={placeholder} > ', '--query', initial], options)
        return None

    def _numbered_menu(self, options: list[str], header: str) -> Optional[str]:
        """Plain fallback; drawn on stderr so stdout stays clean."""
        print(bold(header), file=sys.stderr)
        for i, option in enumerate(options, 1):
            print(f"  {info(f'{i})')} {option}", file=sys.stderr)

        while True:
            print(dim(f"Select [1-{len(options)}] or (q)uit: "), end='', file=sys.stderr, flush=True)
            try:
                line = sys.stdin.readline()
            except KeyboardInterrupt:
                return None
            if not line:  # EOF
                return None
            choice = line.strip().lower()
            if choice == 'q':
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(options):
                return options[int(choice) - 1]
            print(f"Enter 1-{len(options)} or q", file=sys.stderr)
