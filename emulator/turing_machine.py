from dataclasses import dataclass

from emulator.errors import IllegalInputError
from emulator.machine import WILDCARD
from emulator.tape import Tape

SEPARATOR = "-" * 45


@dataclass(frozen=True)
class RunResult:
    accepted: bool
    steps: int


def initialize_tapes(definition, input_string):
    """Validate the input and build one tape per track; track 0 holds the input."""
    illegal = definition.check_input(input_string)
    if illegal is not None:
        position, symbol = illegal
        raise IllegalInputError(symbol, position, input_string)
    tapes = [Tape(input_string)]
    tapes.extend(Tape() for _ in range(definition.track_count - 1))
    return tapes


def digits(n):
    return len(str(n))


class TuringMachine:
    def __init__(self, definition, tapes):
        self.definition = definition
        self.tapes = tapes
        self.current_state = definition.initial
        self.steps = 0
        self.accepted = False
        self.halted = False

    @classmethod
    def from_input(cls, definition, input_string=""):
        return cls(definition, initialize_tapes(definition, input_string))

    @property
    def state(self):
        return self.current_state.name

    @property
    def result(self):
        return self.tapes[0].trimmed_content()

    def heads(self):
        return [tape.read() for tape in self.tapes]

    def observe(self):
        # Acceptance is sticky: once a final state is visited it stays set.
        self.accepted = self.accepted or self.current_state.final

    def advance(self):
        if self.halted:
            return False
        rule = self.current_state.match(self.heads())
        if rule is None:
            self.halted = True
            return False
        for tape, new, direction in zip(self.tapes, rule.writes, rule.directions):
            tape.write(tape.read() if new == WILDCARD else new)
            tape.move(direction)
        self.current_state = self.definition.state(rule.target)
        self.steps += 1
        return True

    def step(self):
        if self.halted:
            return False
        self.observe()
        return self.advance()

    def run(self, on_snapshot=None):
        """Run until no rule matches. There is no step limit."""
        while not self.halted:
            self.observe()
            if on_snapshot is not None:
                on_snapshot(self.snapshot())
            self.advance()
        return RunResult(self.accepted, self.steps)

    def reset(self, input_string=""):
        self.tapes = initialize_tapes(self.definition, input_string)
        self.current_state = self.definition.initial
        self.steps = 0
        self.accepted = False
        self.halted = False

    def snapshot(self):
        tracks = []
        for tape in self.tapes:
            left, right = tape.window()
            tracks.append({
                "head": tape.head,
                "left": left,
                "right": right,
                "cells": tape.cells(left, right),
            })
        return {
            "step": self.steps,
            "state": self.state,
            "accepted": self.accepted,
            "tracks": tracks,
        }

    def render_snapshot(self, snapshot=None):
        """Format a snapshot (the current one by default) as trace lines."""
        if snapshot is None:
            snapshot = self.snapshot()
        width = digits(len(snapshot["tracks"])) + 6
        track_width = digits(len(snapshot["tracks"]))
        lines = [
            f"{'Step':<{width}}: {snapshot['step']}",
            f"{'State':<{width}}: {snapshot['state']}",
            f"{'Acc':<{width}}: {'Yes' if snapshot['accepted'] else 'No'}",
        ]
        for i, track in enumerate(snapshot["tracks"]):
            cells = track["cells"]
            index_row = " ".join(str(abs(j)) for j, _ in cells)
            tape_row = " ".join(f"{symbol:<{digits(abs(j))}}" for j, symbol in cells)
            head_row = "".join(
                " " * digits(abs(j)) + " " for j, _ in cells if j < track["head"]
            ) + "^"
            lines.append(f"Index{i:<{track_width}} : {index_row}")
            lines.append(f"Tape{i:<{track_width}}  : {tape_row}")
            lines.append(f"Head{i:<{track_width}}  : {head_row}")
        lines.append(SEPARATOR)
        return "\n".join(lines)


def run(definition, tapes):
    return TuringMachine(definition, tapes).run()
