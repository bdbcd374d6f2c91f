"""Tests for levels, call-site context and TemplateFormatter."""

from __future__ import annotations

from datetime import datetime

import pytest

from logfan.errors import FormatterError
from logfan.formatter import DEFAULT_TEMPLATE, Formatter, TemplateFormatter
from logfan.levels import LogContext, LogLevel

FIXED = datetime(2026, 3, 4, 5, 6, 7)


class TestLogLevel:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("info", LogLevel.INFO),
            ("INFO", LogLevel.INFO),
            ("inf", LogLevel.INFO),
            ("warning", LogLevel.WARN),
            (" Critical ", LogLevel.CRITICAL),
            ("trc", LogLevel.TRACE),
        ],
    )
    def test_parse(self, text, expected):
        assert LogLevel.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.parse("loud")

    def test_ordering(self):
        assert LogLevel.TRACE < LogLevel.DEBUG < LogLevel.ERROR < LogLevel.OFF

    def test_names(self):
        assert str(LogLevel.WARN) == "Warn"
        assert LogLevel.WARN.short == "Wrn"


class TestLogContext:
    def test_capture_caller(self):
        ctx = LogContext.capture()
        assert ctx.func == "test_capture_caller"
        assert ctx.file_name == "test_formatter.py"
        assert ctx.line > 0

    def test_capture_skips_frames(self):
        def helper():
            return LogContext.capture(skip=1)

        assert helper().func == "test_capture_skips_frames"

    def test_empty_context(self):
        ctx = LogContext()
        assert ctx.short_path == ""
        assert ctx.file_name == ""


class TestTemplateFormatter:
    def test_default_template(self):
        f = TemplateFormatter(clock=lambda: FIXED)
        assert f.template == DEFAULT_TEMPLATE
        assert f.format("up", LogLevel.INFO, None) == "2026-03-04T05:06:07 [Info] up\n"

    def test_all_fields(self):
        f = TemplateFormatter(
            "{date} {LEVEL} {lev} {func} {file}:{line} {msg}", clock=lambda: FIXED
        )
        ctx = LogContext(func="run", path="/srv/app/worker.py", line=42)
        assert f.format("go", LogLevel.ERROR, ctx) == "2026-03-04 ERROR Err run worker.py:42 go"

    def test_format_spec(self):
        f = TemplateFormatter("{level:<8}|{msg}")
        assert f.format("m", LogLevel.INFO, None) == "Info    |m"

    def test_message_braces_are_not_reinterpreted(self):
        f = TemplateFormatter("{msg}")
        assert f.format("{not a field}", LogLevel.INFO, None) == "{not a field}"

    @pytest.mark.parametrize(
        "template",
        ["{nope}", "{}", "{msg.upper}", "{msg", "{msg:{width}}", "{msg:{line}}", "{msg:d}"],
    )
    def test_invalid_template(self, template):
        with pytest.raises(FormatterError):
            TemplateFormatter(template)

    def test_nested_field_rejected_before_any_write(self):
        from logfan.dispatcher import Dispatcher
        from logfan.sinks import MemorySink

        with pytest.raises(FormatterError, match="Nested field"):
            Dispatcher(TemplateFormatter("{msg:{width}}"), [MemorySink()])

    def test_numeric_spec_on_line(self):
        f = TemplateFormatter("{line:04d} {msg}")
        assert f.format("m", LogLevel.INFO, LogContext(line=7)) == "0007 m"

    def test_satisfies_protocol(self):
        assert isinstance(TemplateFormatter(), Formatter)

    def test_str(self):
        assert str(TemplateFormatter("{msg}")) == "TemplateFormatter('{msg}')"
