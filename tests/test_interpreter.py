"""Testy interpretera komend w komentarzach i komend wbudowanych."""

from __future__ import annotations

from engine import ErrorCode


class TestDocumentationSpans:
    def test_text_between_doc_and_end(self, interpret):
        assert interpret("/* @DOC hello @END */") == " hello "

    def test_text_outside_span_is_dropped(self, interpret):
        assert interpret("/* before @DOC inside @END after */") == " inside "

    def test_span_closes_with_comment(self, interpret):
        assert interpret("/* @DOC a */ int x; /* b */") == " a"

    def test_line_comments(self, interpret):
        assert interpret("// @DOC first\n// second\nint x;") == " first"

    def test_commands_outside_span_do_not_fire(self, interpret, ctx):
        assert interpret("/* @SECTION(x) @DOC a @END */") == " a "
        assert "x" not in ctx.sections

    def test_only_plain_characters_are_counted(self, interpret):
        out = interpret("/* @DOC ab@SECTION() cd @END zz @DOC ef@END */")
        assert out == " ab cd  ef"

    def test_lone_at_sign_is_text(self, interpret):
        assert interpret("/* @DOC mail me@home @END */") == " mail me@home "

    def test_escaped_paren_after_command(self, interpret):
        out = interpret("/* @DOC@FUNC_NAME\\(args) @END */\nint run(int x);")
        assert out == "run(args) "


class TestSections:
    def test_prose_routed_to_section_only(self, interpret, ctx):
        assert interpret('/* @DOC@SECTION("x") prose text @SECTION()@END */') == ""
        assert ctx.section_text("x") == " prose text "

    def test_section_then_main(self, interpret, ctx):
        out = interpret("/* @DOC @SECTION(api)first @SECTION() main @END */")
        assert out == "  main "
        assert ctx.section_text("api") == "first "

    def test_section_persists_across_comments_of_one_file(self, interpret, ctx):
        interpret("/* @DOC@SECTION(api)@END */\nint a;\n/* @DOC two @END */")
        assert ctx.section_text("api") == " two "
        assert ctx.main_text == ""

    def test_empty_section_is_created(self, interpret, ctx):
        interpret("/* @DOC@SECTION(empty)@END */")
        assert ctx.section_text("empty") == ""
        assert ctx.section_text("missing") is None


class TestSourceCommands:
    def test_next_line_after_line_comment(self, interpret):
        out = interpret("// @DOC @NEXT_LINE @END\nint value = 3;\nnext")
        assert out == " int value = 3; "

    def test_func_name(self, interpret):
        src = "/* @DOC@FUNC_NAME@END */\nstatic int compute_total(int a, int b) { }"
        assert interpret(src) == "compute_total"

    def test_func_name_operator(self, interpret):
        src = "/* @DOC@FUNC_NAME@END */\nbool operator==(const A& o) const;"
        assert interpret(src) == "operator=="

    def test_next_decl(self, interpret):
        assert interpret("/* @DOC@NEXT_DECL@END */\nconst int limit = 10;") == "const int limit;"

    def test_next_decl_struct(self, interpret):
        assert interpret("/* @DOC@NEXT_DECL@END */\nstruct Point {\n};") == "struct Point;"

    def test_func_ret(self, interpret):
        src = "/* @DOC@FUNC_RET@END */\nstatic const char* name_of(int id);"
        assert interpret(src) == "static const char*"

    def test_func_args(self, interpret):
        src = "/* @DOC@FUNC_ARGS@END */\nvoid f(int a, std::pair<int, int> p, void (*cb)(int));"
        assert interpret(src) == "int a, std::pair<int, int> p, void (*cb)(int)"

    def test_class_name_with_base(self, interpret):
        assert interpret("/* @DOC@CLASS_NAME@END */\nclass Widget : public Base {") == "Widget"

    def test_class_name_forward_declaration(self, interpret):
        src = "/* @DOC@CLASS_NAME@END */\ntemplate <typename T> class Box;"
        assert interpret(src) == "Box"

    def test_next_macro(self, interpret):
        src = "/* @DOC@NEXT_MACRO@END */\n#define MAX(a, b) ((a) > (b) ? (a) : (b))"
        assert interpret(src) == "#define MAX(a, b)"

    def test_file_name(self, interpret):
        assert interpret("/* @DOC@FILE_NAME@END */", "src/nested/widget.cpp") == "widget.cpp"


class TestFuncArg:
    SRC = "/* @DOC@FUNC_ARG({n})@END */\nvoid f(int a, float b, char c);"

    def test_negative_index_counts_from_end(self, interpret):
        src = "/* @DOC@FUNC_ARG(-1)|@FUNC_ARG(2)@END */\nvoid f(int a, float b, char c);"
        assert interpret(src) == "char c|char c"

    def test_first_argument(self, interpret):
        assert interpret(self.SRC.format(n=0)) == "int a"

    def test_out_of_range_reports_and_appends_nothing(self, interpret, ctx):
        assert interpret(self.SRC.format(n=3)) == ""
        assert ctx.reporter.codes() == [ErrorCode.ARG_OUT_OF_RANGE]

    def test_non_integer_index(self, interpret, ctx):
        assert interpret(self.SRC.format(n="x")) == ""
        assert ctx.reporter.codes() == [ErrorCode.BAD_ARG_VALUE]

    def test_requires_exactly_one_argument(self, interpret, ctx):
        assert interpret("/* @DOC@FUNC_ARG@END */\nvoid f(int a);") == ""
        assert ctx.reporter.codes() == [ErrorCode.BAD_ARG_COUNT]

    def test_function_without_arguments(self, interpret, ctx):
        assert interpret("/* @DOC@FUNC_ARG(0)@END */\nvoid f();") == ""
        assert ctx.reporter.codes() == [ErrorCode.ARG_OUT_OF_RANGE]


class TestSimplify:
    SRC = "/* @DOC{cmd}@END */\nvoid f(int   a,\n       int b);"

    def test_simplify_wraps_command(self, interpret):
        assert interpret(self.SRC.format(cmd="@S(FUNC_ARGS)")) == "int a, int b"

    def test_simplify_prefix(self, interpret):
        assert interpret(self.SRC.format(cmd="@S_FUNC_ARGS")) == "int a, int b"

    def test_simplify_passes_remaining_arguments(self, interpret):
        assert interpret(self.SRC.format(cmd="@SIMPLIFY(FUNC_ARG, 0)")) == "int a"

    def test_simplify_without_arguments(self, interpret, ctx):
        assert interpret(self.SRC.format(cmd="@S()")) == ""
        assert ctx.reporter.codes() == [ErrorCode.BAD_ARG_COUNT]


class TestUnknownCommands:
    def test_unknown_command_reports_and_continues(self, interpret, ctx):
        assert interpret("/* @DOC[@NOPE]@END */") == "[]"
        assert ctx.reporter.codes() == [ErrorCode.UNKNOWN_COMMAND]
        assert "NOPE" in ctx.reporter.diagnostics[0].message
        assert ctx.reporter.diagnostics[0].location == "src/sample.cpp"
