import re
from pathlib import Path

from emulator.errors import DescriptionError
from emulator.machine import WILDCARD, MachineDefinition, Rule
from emulator.tape import BLANK, LEFT, RIGHT, STAY

COMMENT_MARKER = ";"
MAX_TRACKS = 2**31 - 1
DIRECTIONS = (LEFT, RIGHT, STAY)

# Bytes that failed to decode, as left behind by the surrogateescape handler.
UNDECODABLE = re.compile("[\udc80-\udcff]")

STATES_TEMPLATE = r"^#Q\s*=\s*\{([A-Za-z0-9_, ]+)\}$"
INPUT_EMPTY_TEMPLATE = r"^#S\s*=\s*\{\}$"
INPUT_TEMPLATE = r"^#S\s*=\s*\{([^;{}*_]+)\}$"
TAPE_TEMPLATE = r"^#G\s*=\s*\{([^;{}*]+)\}$"
INITIAL_TEMPLATE = r"^#q0\s*=\s*([A-Za-z0-9_]+)$"
BLANK_TEMPLATE = r"^#B\s*=\s*_$"
FINAL_EMPTY_TEMPLATE = r"^#F\s*=\s*\{\}$"
FINAL_TEMPLATE = r"^#F\s*=\s*\{([A-Za-z0-9_, ]+)\}$"
TRACKS_TEMPLATE = r"^#N\s*=\s*(\d+)$"

REQUIRED = {
    "Q": "state set (#Q)",
    "S": "input alphabet (#S)",
    "G": "tape alphabet (#G)",
    "q": "initial state (#q0)",
    "N": "track count (#N)",
}


def strip_line(raw):
    """Drop the trailing comment and trailing whitespace."""
    comment = raw.find(COMMENT_MARKER)
    if comment != -1:
        raw = raw[:comment]
    return raw.rstrip()


def split_items(body):
    return [item for item in re.split(r"[, ]+", body) if item]


class DescriptionLoader:
    """
    Single-pass parser for the machine description language.

    Declarations are checked as soon as they are read, so anything that
    refers to states or alphabets has to come after their declaration.
    """

    def __init__(self):
        self.states = None
        self.initial = None
        self.final = []
        self.input_alphabet = None
        self.tape_alphabet = None
        self.track_count = None
        self.rules = []
        self._seen = set()
        self._line = None
        self._line_number = None

    def fail(self, reason):
        raise DescriptionError(self._line, reason, self._line_number)

    def load(self, lines):
        for number, raw in enumerate(lines, start=1):
            line = strip_line(raw)
            if not line:
                continue
            self._line, self._line_number = line, number
            if UNDECODABLE.search(line):
                self._line = line.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
                self.fail("line is not valid UTF-8")
            if len(line) < 2:
                self.fail("line too short")
            if line[0] == "#":
                self.parse_declaration(line)
            else:
                self.parse_rule(line)
        self._line = self._line_number = None

        for key, name in REQUIRED.items():
            if key not in self._seen:
                self.fail(f"missing {name}")

        return MachineDefinition(
            self.states,
            self.initial,
            self.final,
            self.input_alphabet,
            self.tape_alphabet,
            self.track_count,
            self.rules,
        )

    # === Declarations ===
    def parse_declaration(self, line):
        key = line[1]
        handler = {
            "Q": self.parse_states,
            "S": self.parse_input_alphabet,
            "G": self.parse_tape_alphabet,
            "q": self.parse_initial,
            "B": self.parse_blank,
            "F": self.parse_final,
            "N": self.parse_tracks,
        }.get(key)
        if handler is None:
            self.fail(f"unknown declaration #{key}")
        if key in self._seen:
            self.fail(f"duplicate declaration #{key}")
        handler(line)
        self._seen.add(key)

    def match(self, template, line):
        match = re.match(template, line)
        if not match:
            self.fail("malformed declaration")
        return match

    def parse_states(self, line):
        names = split_items(self.match(STATES_TEMPLATE, line).group(1))
        if not names:
            self.fail("empty state set")
        if len(set(names)) != len(names):
            self.fail("duplicate state name")
        self.states = names

    def parse_input_alphabet(self, line):
        if re.match(INPUT_EMPTY_TEMPLATE, line):
            self.input_alphabet = []
            return
        self.input_alphabet = self.parse_symbols(self.match(INPUT_TEMPLATE, line).group(1))

    def parse_tape_alphabet(self, line):
        symbols = self.parse_symbols(self.match(TAPE_TEMPLATE, line).group(1))
        if self.input_alphabet is None:
            self.fail("tape alphabet declared before input alphabet")
        for symbol in self.input_alphabet:
            if symbol not in symbols:
                self.fail(f"input symbol {symbol!r} missing from tape alphabet")
        if BLANK not in symbols:
            self.fail("tape alphabet must contain the blank symbol")
        self.tape_alphabet = symbols

    def parse_symbols(self, body):
        symbols = []
        for token in split_items(body):
            if len(token) != 1:
                self.fail(f"symbol {token!r} is not a single character")
            if token not in symbols:
                symbols.append(token)
        return symbols

    def parse_initial(self, line):
        name = self.match(INITIAL_TEMPLATE, line).group(1)
        self.initial = self.resolve(name)

    def parse_blank(self, line):
        self.match(BLANK_TEMPLATE, line)

    def parse_final(self, line):
        if re.match(FINAL_EMPTY_TEMPLATE, line):
            return
        for name in split_items(self.match(FINAL_TEMPLATE, line).group(1)):
            state = self.resolve(name)
            if state not in self.final:
                self.final.append(state)

    def parse_tracks(self, line):
        count = int(self.match(TRACKS_TEMPLATE, line).group(1))
        if count < 1 or count > MAX_TRACKS:
            self.fail("track count out of range")
        self.track_count = count

    def resolve(self, name):
        if self.states is None:
            self.fail("state referenced before #Q")
        if name not in self.states:
            self.fail(f"no state named {name}")
        return name

    # === Rules ===
    def parse_rule(self, line):
        fields = line.split()
        if len(fields) != 5:
            self.fail("a rule needs exactly five fields")
        if self.tape_alphabet is None or self.track_count is None:
            self.fail("rule declared before #G and #N")
        source, reads, writes, directions, target = fields
        for vector in (reads, writes, directions):
            if len(vector) != self.track_count:
                self.fail(f"expected {self.track_count} symbols in {vector!r}")
        source = self.resolve(source)
        target = self.resolve(target)

        for old, new, direction in zip(reads, writes, directions):
            if old != WILDCARD and old not in self.tape_alphabet:
                self.fail(f"read symbol {old!r} is not in the tape alphabet")
            if new != WILDCARD and new not in self.tape_alphabet:
                self.fail(f"write symbol {new!r} is not in the tape alphabet")
            if old != WILDCARD and new == WILDCARD:
                self.fail("wildcard write requires a wildcard read")
            if direction not in DIRECTIONS:
                self.fail(f"invalid direction {direction!r}")

        self.rules.append(Rule(source, reads, writes, directions, target))


def load_description(text):
    return DescriptionLoader().load(text.splitlines())


def load_file(path):
    """Non-UTF-8 bytes are tolerated inside comments only."""
    with open(Path(path), "r", encoding="utf-8", errors="surrogateescape") as f:
        return DescriptionLoader().load(f)
