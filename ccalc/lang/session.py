"""Session control for the ccalc language, either in command-line mode or file interpretation mode."""

import logging

from ccalc.lang.environment import Environment
from ccalc.lang.error import GenericException
from ccalc.lang.semantics import evaluate_line

logger = logging.getLogger(__name__)


class Session:
    """Governs a ccalc session, owning the environment its lines bind names in."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "#"

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, env=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment() if env is None else env
        self.to_exec = {}  # dict of line num: line to evaluate
        self.results = []  # values of successfully evaluated lines, oldest first

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        self.add(line, line_num + 1)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace from line."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]
        return line.strip()

    def add(self, line, line_num):
        """Queues line for evaluation. Blank and comment-only lines are dropped. Lines are evaluated lazily, when run is
        called.
        """
        line = Session.preprocess_line(line)
        if line:
            self.to_exec[line_num] = line

    def evaluate(self, line):
        """Evaluates line immediately against this session's environment. Returns a Result."""
        return evaluate_line(self.env, line)

    def run(self, echo=False):
        """Evaluates queued lines in order. Each value is appended to results (and printed, if echo); each error is
        thrown through the error handler and only ends its own line.
        """
        for line_num, line in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, line, line_num)
            del self.to_exec[line_num]

            result = self.evaluate(line)
            if result.ok:
                logger.debug("%s:%d: %s", self.path, line_num, result.value)
                self.results.append(result.value)
                if echo:
                    print(result.value)
                self.error_handler.remove_line(self.path)
            else:
                self.error_handler.throw(result.error)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
