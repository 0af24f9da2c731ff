import pytest

SCAN_MACHINE = """\
; accepts every binary string, leaving it on the tape
#Q = {q0,q1}
#S = {0,1}
#G = {0,1,_}
#q0 = q0
#B = _
#F = {q1}
#N = 1

q0 0 0 r q0
q0 1 1 r q0
q0 _ _ * q1
"""

COPY_MACHINE = """\
#Q = {copy, done}
#S = {a, b}
#G = {a, b, _}
#q0 = copy
#B = _
#F = {done}
#N = 2

copy a_ aa rr copy   ; copy track 0 onto track 1
copy b_ bb rr copy
copy __ __ ll done
"""


@pytest.fixture
def scan_source():
    return SCAN_MACHINE


@pytest.fixture
def copy_source():
    return COPY_MACHINE


@pytest.fixture
def machine_file(tmp_path):
    def write(source, name="machine.tm"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path
    return write
