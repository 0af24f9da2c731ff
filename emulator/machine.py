from dataclasses import dataclass

from emulator.tape import BLANK

WILDCARD = "*"


@dataclass(frozen=True)
class Rule:
    source: str
    reads: str
    writes: str
    directions: str
    target: str

    def matches(self, symbols):
        """Wildcard reads match any symbol except blank."""
        for expected, actual in zip(self.reads, symbols):
            if expected != actual and not (expected == WILDCARD and actual != BLANK):
                return False
        return True

    def to_line(self):
        return f"{self.source} {self.reads} {self.writes} {self.directions} {self.target}"


class State:
    def __init__(self, name, final=False, rules=()):
        self._name = name
        self._final = final
        self._rules = tuple(rules)

    @property
    def name(self):
        return self._name

    @property
    def final(self):
        return self._final

    @property
    def rules(self):
        return self._rules

    def match(self, symbols):
        for rule in self._rules:
            if rule.matches(symbols):
                return rule
        return None

    def __repr__(self):
        return f"State({self._name!r}, final={self._final}, rules={len(self._rules)})"


class MachineDefinition:
    """
    Validated, read-only description of a Turing machine.

    `states` keeps declaration order. Rules are grouped under their source
    state in the order they were declared, which is also the order they are
    tried at run time.
    """

    def __init__(self, state_names, initial, final, input_alphabet, tape_alphabet, track_count, rules):
        grouped = {name: [] for name in state_names}
        for rule in rules:
            grouped[rule.source].append(rule)
        final = set(final)
        self._states = {
            name: State(name, name in final, grouped[name]) for name in state_names
        }
        self._initial = initial
        self._input_alphabet = tuple(input_alphabet)
        self._tape_alphabet = tuple(tape_alphabet)
        self._track_count = track_count

    @property
    def states(self):
        return dict(self._states)

    @property
    def initial(self):
        return self._states[self._initial]

    @property
    def final_states(self):
        return [state for state in self._states.values() if state.final]

    @property
    def input_alphabet(self):
        return self._input_alphabet

    @property
    def tape_alphabet(self):
        return self._tape_alphabet

    @property
    def track_count(self):
        return self._track_count

    @property
    def rules(self):
        return [rule for state in self._states.values() for rule in state.rules]

    def state(self, name):
        return self._states[name]

    def check_input(self, input_string):
        """Return the (position, symbol) of the first illegal input symbol, or None."""
        for position, symbol in enumerate(input_string):
            if symbol not in self._input_alphabet:
                return position, symbol
        return None

    def serialize(self):
        lines = [
            "#Q = {" + ",".join(self._states) + "}",
            "#S = {" + ",".join(self._input_alphabet) + "}",
            "#G = {" + ",".join(self._tape_alphabet) + "}",
            f"#q0 = {self._initial}",
            f"#B = {BLANK}",
            "#F = {" + ",".join(state.name for state in self.final_states) + "}",
            f"#N = {self._track_count}",
        ]
        lines.extend(rule.to_line() for rule in self.rules)
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return (
            f"MachineDefinition(states={len(self._states)}, initial={self._initial!r}, "
            f"tracks={self._track_count})"
        )
