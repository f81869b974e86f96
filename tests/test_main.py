import io
import logging

import pytest

from config_reader import read_config
from main import group_message, main, preprocess_message, process

ENIGMA_I_CONFIG = """\
ABCDEFGHIJKLMNOPQRSTUVWXYZ
4 3
I   MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II  ME (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
B   R  (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "enigma_i.conf"
    path.write_text(ENIGMA_I_CONFIG, encoding="utf-8")
    return path


def run(lines, config=ENIGMA_I_CONFIG):
    machine = read_config(config).build()
    out = io.StringIO()
    process(machine, lines, out)
    return out.getvalue()


def test_group_message():
    assert group_message("ABCDEFGHIJKL") == "ABCDE FGHIJ KL"
    assert group_message("ABCDE") == "ABCDE"
    assert group_message("") == ""


def test_preprocess_message(upper):
    assert preprocess_message(" aa A\taa ", upper) == "AAAAA"


def test_process_historical_vector():
    assert run(["* B I II III AAA\n", "AAA AA\n"]) == "BDZGO\n"


def test_process_echoes_blank_lines_and_lowercase():
    assert run(["* B I II III AAA\n", "\n", "aaaaa\n"]) == "\nBDZGO\n"


def test_process_each_settings_line_restarts():
    out = run(["* B I II III AAA\n", "AAAAA\n", "* B I II III AAA\n", "AAAAA\n"])
    assert out == "BDZGO\nBDZGO\n"


def test_process_plugboard_does_not_leak():
    out = run([
        "* B I II III AAA (AB) (CD)\n", "HELLO\n",
        "* B I II III AAA\n", "AAAAA\n",
    ])
    assert out.splitlines()[1] == "BDZGO"


def test_process_message_before_settings():
    with pytest.raises(ValueError, match="No configuration"):
        run(["HELLO\n"])


def test_main_round_trip(tmp_path, config_file):
    plain = tmp_path / "plain.txt"
    cipher = tmp_path / "cipher.txt"
    back = tmp_path / "back.txt"
    plain.write_text("* B III I II QRS (AT) (KM)\nATTACK AT DAWN\n", encoding="utf-8")

    main([str(config_file), str(plain), str(cipher)])
    encrypted = cipher.read_text(encoding="utf-8").strip()
    assert encrypted.replace(" ", "") != "ATTACKATDAWN"

    cipher.write_text(f"* B III I II QRS (AT) (KM)\n{encrypted}\n", encoding="utf-8")
    main([str(config_file), str(cipher), str(back)])
    assert back.read_text(encoding="utf-8") == "ATTAC KATDA WN\n"


def test_main_builtin_suite_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("* B Beta I II III AAAA\nHELLO WORLD\n"))
    main([])
    out = capsys.readouterr().out
    groups = out.split()
    assert [len(g) for g in groups] == [5, 5]


def test_main_reports_errors(config_file, tmp_path):
    msgs = tmp_path / "msgs.txt"
    msgs.write_text("* B I I III AAA\nHELLO\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main([str(config_file), str(msgs)])
    assert str(exc.value.code).startswith("Error: Duplicate rotor name")


def test_main_missing_config(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.conf")])
    assert str(exc.value.code).startswith("Error: could not open")


def test_main_verbose_traces(config_file, tmp_path, caplog, capsys):
    msgs = tmp_path / "msgs.txt"
    msgs.write_text("* B I II III AAA\nA\n", encoding="utf-8")
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        main(["--verbose", str(config_file), str(msgs)])
    assert capsys.readouterr().out == "B\n"
    assert "[AAB] A -> A -> B -> B" in caplog.text


def test_main_debug_reaches_module_loggers(config_file, tmp_path, caplog, capsys):
    import config_reader
    import machine

    msgs = tmp_path / "msgs.txt"
    msgs.write_text("* B I II III AAA\nA\n", encoding="utf-8")
    try:
        with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
            main(["--debug", "stepping", "--debug", "config", str(config_file), str(msgs)])
    finally:
        machine.debug.disable("stepping")
        config_reader.debug.disable("config")
    assert capsys.readouterr().out == "B\n"
    assert "[STEPPING] windows AAB" in caplog.text
    assert "[CONFIG] 4 rotors, 4 slots, 3 pawls" in caplog.text


def test_main_rejects_unknown_debug_component():
    with pytest.raises(SystemExit):
        main(["--debug", "flux"])
