from emulator.errors import DescriptionError, IllegalInputError, ParseError, TuringError
from emulator.loader import load_description, load_file
from emulator.machine import MachineDefinition, Rule, State
from emulator.tape import Tape
from emulator.turing_machine import RunResult, TuringMachine, initialize_tapes, run
