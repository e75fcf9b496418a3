from chrislang.diagnostics import Diagnostic, DiagnosticEngine, Severity, SourceLocation


def test_source_location_defaults_and_fields():
    loc = SourceLocation("test.chr", 3, 7)
    assert (loc.file, loc.line, loc.column) == ("test.chr", 3, 7)
    assert SourceLocation().line == 0
    assert SourceLocation("<builtin>", 0, 0) == SourceLocation("<builtin>", 0, 0)


def test_source_location_str_contains_parts():
    text = str(SourceLocation("test.chr", 3, 7))
    assert text.startswith("test.chr")
    assert "3" in text and "7" in text


def test_new_engine_has_no_errors():
    engine = DiagnosticEngine()
    assert not engine.has_errors()
    assert engine.codes() == []
    assert len(engine) == 0


def test_error_is_recorded():
    engine = DiagnosticEngine()
    loc = SourceLocation("test.chr", 1, 1)
    d = engine.error("E3001", "Function 'f' is already defined", loc)
    assert engine.has_errors()
    assert engine.codes() == ["E3001"]
    assert d.severity is Severity.ERROR
    assert d.message == "Function 'f' is already defined"
    assert d.location == loc


def test_warning_does_not_count_as_error():
    engine = DiagnosticEngine()
    engine.warning("W3040", "Unknown annotation '@Foo'", SourceLocation())
    assert not engine.has_errors()
    assert engine.codes() == ["W3040"]
    assert list(engine)[0].severity is Severity.WARNING


def test_codes_keep_report_order():
    engine = DiagnosticEngine()
    loc = SourceLocation()
    engine.warning("W3041", "deprecated", loc)
    engine.error("E3009", "undefined", loc)
    engine.error("E3003", "mismatch", loc)
    assert engine.codes() == ["W3041", "E3009", "E3003"]
    assert [d.code for d in engine] == engine.codes()


def test_diagnostic_str_mentions_code_and_message():
    d = Diagnostic(Severity.ERROR, "E3016", "Unknown type 'Foo'", SourceLocation("a.chr", 2, 5))
    text = str(d)
    assert "E3016" in text
    assert "Unknown type 'Foo'" in text
    assert text.startswith(str(SourceLocation("a.chr", 2, 5)))