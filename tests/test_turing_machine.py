"""
Emulator tests: rule matching, wildcards, sticky acceptance and tape setup.
"""
from pathlib import Path

import pytest

from emulator.errors import IllegalInputError
from emulator.loader import load_description, load_file
from emulator.turing_machine import RunResult, TuringMachine, initialize_tapes, run

MACHINES = Path(__file__).resolve().parent.parent / "machines"


def machine(source, input_string=""):
    return TuringMachine.from_input(load_description(source), input_string)


def single_track(rules, final="q1", states="q0, q1, q2", symbols="0, 1, x"):
    return (
        f"#Q = {{{states}}}\n#S = {{0, 1}}\n#G = {{{symbols}, _}}\n"
        f"#q0 = q0\n#F = {{{final}}}\n#N = 1\n" + "\n".join(rules) + "\n"
    )


class TestEndToEnd:
    def test_scan_accepts_101(self, scan_source):
        tm = machine(scan_source, "101")
        result = tm.run()
        assert result == RunResult(accepted=True, steps=4)
        assert tm.state == "q1"
        assert tm.halted
        assert tm.result == "101"

    def test_scan_on_empty_input(self, scan_source):
        tm = machine(scan_source, "")
        result = tm.run()
        assert result.accepted
        assert result.steps == 1
        assert tm.result == ""

    def test_module_level_run_mutates_tapes(self, scan_source):
        definition = load_description(scan_source)
        tapes = initialize_tapes(definition, "10")
        result = run(definition, tapes)
        assert result.steps == 3
        assert tapes[0].head == 2
        assert tapes[0].trimmed_content() == "10"

    def test_two_track_copy(self, copy_source):
        tm = machine(copy_source, "abba")
        result = tm.run()
        assert result == RunResult(accepted=True, steps=5)
        assert tm.state == "done"
        assert [tape.trimmed_content() for tape in tm.tapes] == ["abba", "abba"]

    def test_result_reaches_into_negative_cells(self):
        tm = machine(single_track(["q0 1 1 l q1", "q1 _ x * q2"], final="q2"), "1")
        tm.run()
        assert tm.tapes[0].head == -1
        assert tm.result == "x1"


class TestIllegalInput:
    def test_symbol_and_position_are_reported(self, scan_source):
        definition = load_description(scan_source)
        with pytest.raises(IllegalInputError) as info:
            initialize_tapes(definition, "102")
        assert info.value.symbol == "2"
        assert info.value.position == 2
        assert info.value.input == "102"

    def test_first_illegal_symbol_wins(self, scan_source):
        with pytest.raises(IllegalInputError) as info:
            machine(scan_source, "a2")
        assert info.value.symbol == "a"
        assert info.value.position == 0

    def test_blank_is_not_an_input_symbol(self, scan_source):
        with pytest.raises(IllegalInputError):
            machine(scan_source, "1_1")

    def test_no_tapes_after_failed_reset(self, scan_source):
        tm = machine(scan_source, "11")
        tapes = tm.tapes
        with pytest.raises(IllegalInputError):
            tm.reset("102")
        assert tm.tapes is tapes

    def test_extra_tracks_start_blank(self, copy_source):
        tapes = initialize_tapes(load_description(copy_source), "ab")
        assert len(tapes) == 2
        assert tapes[0].trimmed_content() == "ab"
        assert tapes[1].cells() == [(0, "_")]


class TestWildcards:
    def test_wildcard_read_skips_blank(self):
        tm = machine(single_track(["q0 * * r q0"]), "101")
        result = tm.run()
        assert result.steps == 3
        assert tm.state == "q0"
        assert not result.accepted

    def test_wildcard_never_selected_on_blank_even_as_last_resort(self):
        tm = machine(single_track(["q0 * 1 r q1"]), "")
        result = tm.run()
        assert result.steps == 0
        assert tm.halted
        assert tm.state == "q0"

    def test_wildcard_write_keeps_symbol_and_moves(self):
        tm = machine(single_track(["q0 * * l q1"]), "1")
        assert tm.step()
        assert tm.tapes[0].fetch(0) == "1"
        assert tm.tapes[0].head == -1
        assert tm.state == "q1"

    def test_explicit_write_with_wildcard_read(self):
        tm = machine(single_track(["q0 * x * q1"]), "0")
        tm.run()
        assert tm.result == "x"

    def test_wildcard_per_track(self, copy_source):
        source = copy_source.replace("copy a_ aa rr copy", "copy *_ *a rr copy")
        tm = machine(source, "bb")
        tm.run()
        assert [tape.trimmed_content() for tape in tm.tapes] == ["bb", "aa"]


class TestRuleOrder:
    def test_first_matching_rule_wins(self):
        tm = machine(single_track(["q0 * x * q1", "q0 1 0 * q2"]), "1")
        tm.run()
        assert tm.state == "q1"
        assert tm.result == "x"

    def test_later_rule_used_when_earlier_does_not_match(self):
        tm = machine(single_track(["q0 0 x * q1", "q0 1 0 * q2"], final="q2"), "1")
        tm.run()
        assert tm.state == "q2"
        assert tm.result == "0"


class TestAcceptance:
    def test_acceptance_is_sticky(self):
        tm = machine(single_track(["q0 _ _ * q1"], final="q0"), "")
        result = tm.run()
        assert result.accepted
        assert tm.state == "q1"
        assert not tm.current_state.final

    def test_initial_final_state_without_rules(self):
        tm = machine(single_track([], final="q0"), "01")
        result = tm.run()
        assert result == RunResult(accepted=True, steps=0)

    def test_never_visiting_final_state_rejects(self):
        tm = machine(single_track(["q0 0 1 r q2"]), "0")
        result = tm.run()
        assert result == RunResult(accepted=False, steps=1)
        assert tm.result == "1"

    def test_final_state_reached_on_last_step(self):
        tm = machine(single_track(["q0 1 1 * q1"]), "1")
        tm.run()
        assert tm.accepted


class TestStepping:
    def test_step_reports_progress_and_halt(self, scan_source):
        tm = machine(scan_source, "1")
        assert tm.step()
        assert tm.step()
        assert tm.steps == 2
        assert not tm.step()
        assert tm.halted
        assert tm.accepted
        assert not tm.step()

    def test_reset_restarts_run_state(self, scan_source):
        tm = machine(scan_source, "11")
        tm.run()
        tm.reset("0")
        assert tm.steps == 0
        assert not tm.accepted
        assert not tm.halted
        assert tm.state == "q0"
        assert tm.run().steps == 2

    def test_snapshots_include_halted_configuration(self, scan_source):
        tm = machine(scan_source, "10")
        snapshots = []
        tm.run(on_snapshot=snapshots.append)
        assert [s["step"] for s in snapshots] == [0, 1, 2, 3]
        assert snapshots[0]["state"] == "q0"
        assert snapshots[-1]["state"] == "q1"
        assert snapshots[-1]["accepted"]
        track = snapshots[0]["tracks"][0]
        assert track["head"] == 0
        assert track["cells"] == [(0, "1"), (1, "0")]

    def test_render_snapshot(self, scan_source):
        tm = machine(scan_source, "101")
        tm.step()
        assert tm.render_snapshot().splitlines() == [
            "Step   : 1",
            "State  : q0",
            "Acc    : No",
            "Index0 : 0 1 2",
            "Tape0  : 1 0 1",
            "Head0  :   ^",
            "-" * 45,
        ]

    def test_render_given_snapshot(self, scan_source):
        tm = machine(scan_source, "101")
        earlier = tm.snapshot()
        tm.step()
        tm.step()
        lines = tm.render_snapshot(earlier).splitlines()
        assert lines[0] == "Step   : 0"
        assert lines[5] == "Head0  : ^"


class TestSampleMachines:
    @pytest.mark.parametrize("word, accepted", [
        ("", True),
        ("1", True),
        ("0110", True),
        ("10101", True),
        ("01", False),
        ("0111", False),
    ])
    def test_palindrome(self, word, accepted):
        definition = load_file(MACHINES / "palindrome.tm")
        tm = TuringMachine.from_input(definition, word)
        assert tm.run().accepted is accepted
        assert tm.result == word

    def test_scan(self):
        tm = TuringMachine.from_input(load_file(MACHINES / "scan.tm"), "101")
        assert tm.run() == RunResult(accepted=True, steps=4)
