import pytest

from lispy.repl import BANNER, PROMPT, create_arg_parser, main, repl, run_files


def feed(*lines):
    """read_line stand-in: hands out `lines`, then signals end of input."""
    prompts = []
    pending = list(lines)

    def read_line(prompt):
        prompts.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)

    read_line.prompts = prompts
    return read_line


def test_arg_parser_defaults():
    args = create_arg_parser().parse_args([])
    assert args.files == []
    assert args.no_prelude is False
    assert args.log_level is None


def test_arg_parser_options():
    args = create_arg_parser().parse_args(["a.lspy", "b.lspy", "--no-prelude", "--log-level", "debug"])
    assert args.files == ["a.lspy", "b.lspy"]
    assert args.no_prelude is True
    assert args.log_level == "debug"


def test_repl_prints_results(interp, capsys):
    read_line = feed("+ 1 2", "", "   ", "(def {x} {1 2})", "x", "(head)")
    repl(interp, read_line)
    out = capsys.readouterr().out
    assert out.startswith(BANNER)
    assert out[len(BANNER):].split("\n") == ["", "3", "()", "{1 2}", "<builtin>", "", ""]
    assert read_line.prompts == [PROMPT] * 7


def test_repl_reports_errors_and_continues(interp, capsys):
    repl(interp, feed("(/ 1 0)", "(+ 1", "missing", "(+ 2 2)"))
    lines = capsys.readouterr().out.splitlines()
    assert "Error: Division By Zero." in lines
    assert "<stdin>:1:4: unexpected end of input, expected ')'" in lines
    assert "Error: Unbound Symbol 'missing'" in lines
    assert lines[-2] == "4"


def test_repl_survives_runaway_recursion(interp, capsys):
    interp.eval("def {loop} (\\ {n} {loop n})")
    repl(interp, feed("loop 1", "(+ 1 1)"))
    out = capsys.readouterr().out
    assert "Error: maximum recursion depth exceeded" in out
    assert "\n2\n" in out


def test_repl_stops_on_interrupt(interp, capsys):
    def read_line(prompt):
        raise KeyboardInterrupt

    repl(interp, read_line)
    assert capsys.readouterr().out == BANNER + "\n\n"


def test_run_files(interp, tmp_path, capsys):
    good = tmp_path / "good.lspy"
    good.write_text('(print "hello")', encoding="utf-8")
    assert run_files(interp, [str(good)]) == 0
    assert capsys.readouterr().out == '"hello"\n'

    assert run_files(interp, [str(tmp_path / "missing.lspy"), str(good)]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error: Could not load Library")
    assert out.endswith('"hello"\n')


@pytest.mark.parametrize("prelude_flag", [[], ["--no-prelude"]])
def test_main_with_files(tmp_path, capsys, prelude_flag):
    src = tmp_path / "prog.lspy"
    src.write_text("(print (+ 40 2))", encoding="utf-8")
    assert main([*prelude_flag, str(src)]) == 0
    assert capsys.readouterr().out == "42\n"


def test_main_uses_prelude_unless_disabled(tmp_path, capsys):
    src = tmp_path / "prog.lspy"
    src.write_text("(print (len {1 2 3}))", encoding="utf-8")
    assert main([str(src)]) == 0
    assert capsys.readouterr().out == "3\n"

    assert main(["--no-prelude", str(src)]) == 0
    assert "Unbound Symbol 'len'" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main(["--no-prelude", str(tmp_path / "nope.lspy")]) == 1
    assert "Could not load Library" in capsys.readouterr().out


def test_main_keeps_loading_after_runaway_recursion(tmp_path, capsys):
    src = tmp_path / "deep.lspy"
    src.write_text(
        '(def {spin} (\\ {n} {spin n}))\n(spin 1)\n(print "after")\n',
        encoding="utf-8",
    )
    assert main(["--no-prelude", str(src)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["Error: maximum recursion depth exceeded", '"after"']
