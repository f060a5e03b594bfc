"""Tests for strict template rendering."""

import io
from pathlib import Path

import pytest

from envrender.exceptions import (
    OutputWriteError,
    RenderError,
    RenderSyntaxError,
    SourceIOError,
    UndefinedVariableError,
)
from envrender.rendering import read_template, render, render_to
from envrender.variables import BindingSet, resolve


class TestRender:
    """Tests for render()."""

    def test_substitutes_bound_variables(self):
        bindings = BindingSet(values={'KEY': 'test value'})

        assert render("The value is {{KEY}}.", bindings) == "The value is test value."

    def test_binding_set_keys_bind_whole_names(self):
        bindings = BindingSet(values={'AB': 'two', 'LONGER_NAME': 'many'})

        assert render("{{AB}} {{LONGER_NAME}}", bindings) == "two many"

    def test_renders_resolved_bindings(self, tmp_path):
        env_file = tmp_path / "vars.env"
        env_file.write_text("KEY=test value\n")
        out = io.StringIO()

        render_to("The value is {{KEY}}.\n", resolve(False, env_file), out)

        assert out.getvalue() == "The value is test value.\n"

    def test_trailing_newline_is_preserved(self):
        assert render("{{A}}\n", {'A': 'x'}) == "x\n"

    def test_missing_variable_names_the_variable(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            render("The global is {{GLOBAL_VALUE}}.", {'KEY': 'test value'})

        assert exc_info.value.name == 'GLOBAL_VALUE'
        assert 'Variable "GLOBAL_VALUE" not found' in str(exc_info.value)
        assert exc_info.value.exit_code == 2

    def test_first_missing_variable_is_reported(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            render("{{PRESENT}} {{FIRST}} {{SECOND}}", {'PRESENT': 'yes'})

        assert exc_info.value.name == 'FIRST'

    def test_missing_variable_in_loop_is_an_error(self):
        with pytest.raises(UndefinedVariableError):
            render("{% for c in LETTERS %}{{c}}{% endfor %}", {})

    def test_lenient_mode_substitutes_empty_text(self):
        assert render("[{{MISSING}}]", {}, strict=False) == "[]"

    def test_defined_test_does_not_trip_strict_mode(self):
        template = "{% if OPTIONAL is defined %}{{OPTIONAL}}{% else %}none{% endif %}"

        assert render(template, {}) == "none"
        assert render(template, {'OPTIONAL': 'set'}) == "set"

    def test_default_filter(self):
        assert render("{{ PORT | default('8080') }}", {}) == "8080"

    def test_missing_attribute_is_a_render_error(self):
        with pytest.raises(RenderError) as exc_info:
            render("{{ KEY.nope }}", {'KEY': 'value'})

        assert not isinstance(exc_info.value, UndefinedVariableError)

    def test_evaluation_failure_is_a_render_error(self):
        with pytest.raises(RenderError) as exc_info:
            render("{{ KEY + 1 }}", {'KEY': 'text'})

        assert exc_info.value.exit_code == 2
        assert "TypeError" in str(exc_info.value)

    def test_filter_failure_is_a_render_error(self):
        with pytest.raises(RenderError):
            render("{{ PORT | int // 0 }}", {'PORT': '8080'})

    def test_syntax_error_reports_line(self):
        with pytest.raises(RenderSyntaxError) as exc_info:
            render("line one\n{{ KEY ", {'KEY': 'value'})

        assert exc_info.value.line == 2
        assert "line 2" in str(exc_info.value)

    def test_no_html_escaping(self):
        assert render("{{V}}", {'V': '<a & b>'}) == "<a & b>"


class TestRenderTo:
    """Tests for render_to()."""

    def test_writes_rendered_text(self):
        out = io.StringIO()
        render_to("The value is {{KEY}}.\n", {'KEY': 'test value'}, out)

        assert out.getvalue() == "The value is test value.\n"

    def test_nothing_written_when_rendering_fails(self):
        out = io.StringIO()
        with pytest.raises(UndefinedVariableError):
            render_to("prefix {{MISSING}} suffix", {}, out)

        assert out.getvalue() == ""

    def test_write_failure_raises_output_error(self):
        class BrokenStream(io.StringIO):
            name = '<broken>'

            def write(self, text):
                raise OSError(28, "No space left on device")

        with pytest.raises(OutputWriteError) as exc_info:
            render_to("{{A}}", {'A': 'x'}, BrokenStream())

        assert "No space left on device" in str(exc_info.value)
        assert exc_info.value.target == '<broken>'


class TestReadTemplate:
    """Tests for read_template()."""

    def test_reads_whole_file(self, tmp_path):
        path = tmp_path / "template.txt"
        path.write_text("a {{B}}\nc\n")

        assert read_template(path) == "a {{B}}\nc\n"

    def test_missing_template(self, tmp_path):
        with pytest.raises(SourceIOError) as exc_info:
            read_template(tmp_path / "missing.txt")

        assert exc_info.value.path == tmp_path / "missing.txt"

    def test_undecodable_template(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(SourceIOError) as exc_info:
            read_template(path)

        assert "UTF-8" in str(exc_info.value)
