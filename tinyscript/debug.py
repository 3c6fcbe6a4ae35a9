from typing import IO, Optional


class DebugLog:
    """Verbosity-levelled trace written to a plain text file.

    Level 1 records phases (parse, type check, run), level 2 individual
    statements and level 3 scope entry and exit. Nothing is written, and the
    file is never created, when the level is 0.
    """
    def __init__(self, level: int = 0, path: str = 'debug.txt'):
        self.level = level
        self.path = path
        self.fp: Optional[IO[str]] = None
        self.opened = False

    def write(self, level: int, msg: str):
        if self.level < level:
            return
        if self.fp is None:
            # truncate on the first write only; later writes after close() append
            self.fp = open(self.path, 'a' if self.opened else 'w', encoding='utf-8')
            self.opened = True
        self.fp.write(msg + '\n')
        self.fp.flush()

    def close(self):
        if self.fp:
            self.fp.close()
            self.fp = None
