import sys
from typing import IO, List, Optional

from tinyscript.errors import RuntimeFault


class Console:
    """Console channels used by `println` and `readln`.

    Output is an append-only text sink. Input is read as whitespace-delimited
    tokens: a line is split on arrival and surplus tokens are kept for later
    calls. When no stream is given the process's stdin/stdout are looked up
    on every call, so a replaced `sys.stdout` (e.g. under pytest) is honoured.
    """
    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None):
        self._stdin = stdin
        self._stdout = stdout
        self.pending: List[str] = []

    @property
    def stdin(self) -> IO[str]:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    def write_line(self, text: str) -> None:
        self.stdout.write(text + '\n')
        self.stdout.flush()

    def read_token(self) -> str:
        while not self.pending:
            line = self.stdin.readline()
            if line == '':
                raise RuntimeFault('EOFError', 'readln reached the end of input')
            self.pending = line.split()
        return self.pending.pop(0)
