"""Testy szablonu .docgen: czytnik linii, komendy orkiestratora, pełny przebieg."""

from __future__ import annotations

from pathlib import Path

from engine import ErrorCode, build_docs, render_document, run_template_command
from engine.orchestrator import expand_patterns
from engine.template import TemplateItem, read_template


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestReadTemplate:
    def test_text_and_commands(self):
        source = (
            "# Title\n"
            "@@NEW_ALIAS(A, b)@@ ignored\n"
            "text\n"
            "@@NEW_COMMAND(X, {\n"
            "  return 'a'\n"
            "})\n"
            "@@\n"
            "end"
        )
        assert list(read_template(source)) == [
            TemplateItem("TEXT", "# Title", 1, 1),
            TemplateItem("COMMAND", "NEW_ALIAS(A, b)", 2, 2),
            TemplateItem("TEXT", "text", 3, 3),
            TemplateItem("COMMAND", "NEW_COMMAND(X, {\n  return 'a'\n})\n", 4, 7),
            TemplateItem("TEXT", "end", 8, 8),
        ]

    def test_closing_line_remainder_belongs_to_command(self):
        items = list(read_template("@@NEW_ALIAS(A,\n@@ b)"))
        assert items == [TemplateItem("COMMAND", "NEW_ALIAS(A,\n b)", 1, 2)]

    def test_location(self):
        assert TemplateItem("COMMAND", "", 3, 3).location == "linia 3"
        assert TemplateItem("COMMAND", "", 3, 5).location == "linie 3–5"

    def test_only_newlines_end_lines(self):
        items = list(read_template("a\x0cb\u2028c\r\n@@NEW_ALIAS(X, y)@@\r\nend\r\n"))
        assert items == [
            TemplateItem("TEXT", "a\x0cb\u2028c", 1, 1),
            TemplateItem("COMMAND", "NEW_ALIAS(X, y)", 2, 2),
            TemplateItem("TEXT", "end", 3, 3),
        ]

    def test_empty_template(self):
        assert list(read_template("")) == []


class TestTemplateCommands:
    def test_unknown_command(self, ctx):
        run_template_command("MAKE_COFFEE(now)", ctx, "linia 4")
        assert ctx.reporter.codes() == [ErrorCode.UNKNOWN_TEMPLATE_COMMAND]
        assert ctx.reporter.diagnostics[0].location == "linia 4"

    def test_insert_section_collapses_blank_lines(self, ctx):
        ctx.sections["x"] = ["a\n\n\n\nb"]
        run_template_command('INSERT_SECTION("x")', ctx)
        assert ctx.output_text == "a\n\nb\n\n"

    def test_insert_missing_section(self, ctx):
        run_template_command("INSERT_SECTION(nowhere)", ctx)
        assert ctx.output_text == ""
        assert ctx.reporter.codes() == [ErrorCode.SECTION_NOT_FOUND]

    def test_insert_section_argument_count(self, ctx):
        run_template_command("INSERT_SECTION(a, b)", ctx)
        assert ctx.reporter.codes() == [ErrorCode.BAD_ARG_COUNT]

    def test_process_sources_without_matches(self, ctx):
        run_template_command("PROCESS_SOURCES(src/*.cpp, include/*.h)", ctx)
        assert ctx.reporter.codes() == [ErrorCode.NO_SOURCES]
        assert "include/*.h" in ctx.reporter.diagnostics[0].message

    def test_section_reset_after_each_file(self, ctx, tmp_path):
        _write(tmp_path / "a.src", "/* @DOC@SECTION(api) A @END */")
        _write(tmp_path / "b.src", "/* @DOC B @END */")
        run_template_command("PROCESS_SOURCES(*.src)", ctx)
        assert ctx.section_text("api") == " A "
        assert ctx.main_text == " B "
        assert ctx.current_section == ""

    def test_process_sources_reports_progress(self, ctx, tmp_path):
        _write(tmp_path / "one.src", "/* @DOC x @END */")
        run_template_command("PROCESS_SOURCES(*.src)", ctx)
        assert "one.src" in ctx.reporter.console.file.getvalue()

    def test_unreadable_source_is_skipped(self, ctx, tmp_path, monkeypatch):
        _write(tmp_path / "a.src", "/* @DOC A @END */")
        bad = _write(tmp_path / "b.src", "/* @DOC@SECTION(lost) B @END */")
        _write(tmp_path / "c.src", "/* @DOC C @END */")

        read_text = Path.read_text

        def failing_read(self, *args, **kwargs):
            if self.name == "b.src":
                raise PermissionError(13, "Permission denied", str(self))
            return read_text(self, *args, **kwargs)

        monkeypatch.setattr(Path, "read_text", failing_read)
        run_template_command("PROCESS_SOURCES(*.src)", ctx)

        assert ctx.main_text == " A  C "
        assert ctx.section_text("lost") is None
        assert ctx.reporter.codes() == [ErrorCode.SOURCE_READ]
        assert ctx.reporter.diagnostics[0].location == str(bad)

    def test_new_command_write_failure(self, ctx):
        ctx.output_dir.mkdir()
        (ctx.output_dir / "commands").write_text("not a directory", encoding="utf-8")

        run_template_command("NEW_COMMAND(SHOUT, {return code})", ctx, "linia 2")

        assert ctx.reporter.codes() == [ErrorCode.BUILD_FAILED]
        assert ctx.reporter.diagnostics[0].location == "linia 2"
        assert ctx.extensions == {}

    def test_expand_patterns_recursive_sorted_unique(self, tmp_path):
        b = _write(tmp_path / "src" / "deep" / "b.cpp", "")
        a = _write(tmp_path / "src" / "a.cpp", "")
        _write(tmp_path / "src" / "notes.txt", "")
        (tmp_path / "src" / "dir.cpp").mkdir()

        found = expand_patterns(["src/**/*.cpp", '"src/*.cpp"'], tmp_path)
        assert found == [a, b]


class TestRenderDocument:
    def test_single_file_corpus(self, ctx, tmp_path):
        _write(tmp_path / "one.src", "/* @DOC @FILE_NAME @END */")
        document = render_document("@@PROCESS_SOURCES(*.src)@@\n", ctx)
        assert document == "one.src"
        assert ctx.reporter.diagnostics == []

    def test_sections_and_literal_lines(self, ctx, tmp_path):
        _write(
            tmp_path / "src" / "math.cpp",
            "/* @DOC @SECTION(funcs)\n"
            "### @FUNC_NAME\n"
            "Adds two numbers.\n"
            "@END */\n"
            "int add(int a, int b);\n",
        )
        template = (
            "# API\n"
            "\n\n\n"
            "@@PROCESS_SOURCES(src/*.cpp)@@\n"
            "## Functions\n"
            "@@INSERT_SECTION(funcs)@@\n"
            "Footer\n"
        )
        document = render_document(template, ctx)
        assert document == "# API\n\n## Functions\n\n### add\nAdds two numbers.\n\nFooter"
        assert ctx.reporter.diagnostics == []

    def test_main_buffer_follows_template(self, ctx, tmp_path):
        _write(tmp_path / "x.src", "/* @DOC tail text @END */")
        document = render_document("Head\n@@PROCESS_SOURCES(x.src)@@\n", ctx)
        assert document == "Head\n tail text"

    def test_aliases_and_commands_from_template(self, ctx, tmp_path):
        _write(
            tmp_path / "lib.h",
            "// @DOC @ENTRY @END\n"
            "int   parse_header(const char*  text);\n",
        )
        template = (
            "@@NEW_ALIAS(ENTRY, {- `@S_NEXT_LINE` from @LOWER_FILE})@@\n"
            "@@NEW_COMMAND(LOWER_FILE, {\n"
            "    return 'lib.h'.lower()\n"
            "})\n"
            "@@\n"
            "@@PROCESS_SOURCES(*.h)@@\n"
        )
        document = render_document(template, ctx)
        assert document == "- `int parse_header(const char* text);` from lib.h"
        assert ctx.reporter.diagnostics == []

    def test_errors_do_not_stop_the_run(self, ctx, tmp_path):
        _write(tmp_path / "ok.src", "/* @DOC fine @UNKNOWN @END */")
        template = "@@BOGUS@@\n@@INSERT_SECTION(none)@@\n@@PROCESS_SOURCES(*.src)@@\nEnd\n"
        document = render_document(template, ctx)
        assert document == "End\n fine"
        assert ctx.reporter.codes() == [
            ErrorCode.UNKNOWN_TEMPLATE_COMMAND,
            ErrorCode.SECTION_NOT_FOUND,
            ErrorCode.UNKNOWN_COMMAND,
        ]


class TestBuildDocs:
    def test_missing_template_is_a_clean_no_op(self, ctx, tmp_path):
        assert build_docs(ctx) is None
        assert not (tmp_path / "docs").exists()
        assert ctx.reporter.diagnostics == []

    def test_writes_index(self, ctx, tmp_path):
        _write(tmp_path / ".docgen", "# Docs\n@@PROCESS_SOURCES(*.c)@@\n")
        _write(tmp_path / "m.c", "/* @DOC body @END */")
        out = build_docs(ctx)
        assert out == tmp_path / "docs" / "index.md"
        assert out.read_text(encoding="utf-8") == "# Docs\n body"

    def test_custom_template_name(self, ctx, tmp_path):
        _write(tmp_path / "docs.tpl", "Only text\n")
        out = build_docs(ctx, "docs.tpl")
        assert out.read_text(encoding="utf-8") == "Only text"

    def test_template_with_invalid_utf8(self, ctx, tmp_path):
        (tmp_path / ".docgen").write_bytes(b"# T \xff\n")
        out = build_docs(ctx)
        assert out.read_text(encoding="utf-8") == "# T \ufffd"
        assert ctx.reporter.diagnostics == []

    def test_unwritable_output_is_reported(self, ctx, tmp_path):
        _write(tmp_path / ".docgen", "Text\n")
        ctx.output_dir.write_text("a file, not a directory", encoding="utf-8")

        assert build_docs(ctx) is None
        assert ctx.reporter.codes() == [ErrorCode.OUTPUT_WRITE]
