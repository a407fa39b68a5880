"""
Compiler tests

Tests variable semantics, whitespace collapsing, includes and error
locations through the compile() entry point.
"""

import pytest

from turf import compile, compile_file
from turf.lib.errors import (
    IncludeNotFound,
    RecursiveInclude,
    TurfError,
    UndefinedVariable,
    UnsupportedDirective,
    UnterminatedComment,
)
from turf.lib.filestore import LocalFileStore, MemoryFileStore


def write(directory, name, content):
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestPlainText:
    """Test documents without directives"""

    @pytest.mark.parametrize(
        "source",
        ["", "plain text", "a\n\nb\n", "<p><!-- a note --></p>\n<!--\nmulti\n-->\n"],
    )
    def test_directive_free_input_is_unchanged(self, source):
        """Text without directives compiles to itself"""
        assert compile(source) == source


class TestVariables:
    """Test definitions and references"""

    def test_define_then_reference(self):
        """A definition is visible to the reference after it"""
        assert compile("Hello <!--@name World--><!--@name-->!") == "Hello World!"

    def test_document_order(self):
        """Each reference sees the latest definition before it"""
        source = "<!--@x 1--><!--@x-->\n<!--@x 2--><!--@x-->"
        assert compile(source) == "12"

    def test_dollar_sigil_and_operators(self):
        """The $ sigil and = / : operators define variables"""
        source = "<!--$a = A--><!--@b: B--><!--$a--><!--$b-->"
        assert compile(source) == "AB"

    def test_initial_variables(self):
        """Variables passed to compile() can be referenced"""
        assert compile("<!--@site-->", variables={"site": "turf"}) == "turf"

    def test_initial_variables_not_mutated(self):
        """Definitions never write back into the caller's mapping"""
        variables = {"x": "1"}
        compile("<!--@x 2--><!--@y 3-->", variables=variables)
        assert variables == {"x": "1"}

    def test_optional_reference(self):
        """An undefined optional reference yields nothing"""
        assert compile("[<!--@missing?-->]") == "[]"

    def test_undefined_reference_fails(self):
        """An undefined non-optional reference raises"""
        with pytest.raises(UndefinedVariable, match="missing"):
            compile("<!--@missing-->")

    def test_nil_clears_variable(self):
        """nil sets an empty value; non-optional references still succeed"""
        assert compile("<!--@x 1--><!--@x nil-->[<!--@x-->][<!--@x?-->]") == "[][]"

    def test_compile_directive_rejected(self):
        """@compile always fails with a fixed message"""
        with pytest.raises(UnsupportedDirective, match="@compile is not supported"):
            compile("<!--@compile other.kit-->")


class TestWhitespaceCollapse:
    """Test removal of blank runs around definitions"""

    def test_definition_line_leaves_nothing(self):
        """A line holding only a definition produces no output"""
        assert compile("<!--@x v-->\n") == ""

    def test_definition_lines_before_content(self):
        """Consecutive definition lines leave no blank lines"""
        source = "<!--@x 1-->\n<!--$y = 2-->\n<p><!--@x--><!--@y--></p>\n"
        assert compile(source) == "<p>12</p>\n"

    def test_indented_definition(self):
        """Indentation before a definition is dropped with it"""
        assert compile("  <!--@x v-->\nText") == "Text"

    def test_reference_line_is_kept(self):
        """Whitespace around references is not collapsed"""
        assert compile("<!--@x-->\n", variables={"x": "v"}) == "v\n"

    def test_text_next_to_definition_is_kept(self):
        """Non-blank text beside a definition is untouched"""
        assert compile("a <!--@x v--> b") == "a  b"


class TestIncludes:
    """Test include resolution and loading on the local filesystem"""

    def test_include_partial(self, tmp_path):
        """An include falls back to the _partial file"""
        write(tmp_path, "_header.kit", "<h1><!--@title--></h1>")
        index = write(tmp_path, "index.kit", "<!--@title Home-->\n<!--@include header-->\n")
        assert compile_file(str(index)) == "<h1>Home</h1>\n"

    def test_multiple_includes_join_with_newline(self, tmp_path):
        """Comma separated includes are joined by a newline"""
        write(tmp_path, "a.kit", "A")
        write(tmp_path, "b.html", "B")
        index = write(tmp_path, "index.kit", "<!--@import 'a', \"b.html\"-->")
        assert compile_file(str(index)) == "A\nB"

    def test_child_mutations_do_not_leak(self, tmp_path):
        """Includes get a snapshot; their definitions stay local"""
        write(tmp_path, "child.kit", "<!--@x 2--><!--@x-->")
        index = write(tmp_path, "index.kit", "<!--@x 1--><!--@include child--><!--@x-->")
        assert compile_file(str(index)) == "21"

    def test_siblings_see_parent_state(self, tmp_path):
        """A later include observes the parent, not an earlier sibling"""
        write(tmp_path, "set.kit", "<!--@x sibling-->")
        write(tmp_path, "get.kit", "<!--@x-->")
        index = write(
            tmp_path, "index.kit", "<!--@x parent--><!--@include set, get-->|<!--@x later--><!--@include get-->"
        )
        assert compile_file(str(index)) == "\nparent|later"

    def test_raw_include_is_not_compiled(self, tmp_path):
        """Files without a template extension are spliced verbatim"""
        write(tmp_path, "style.css", "/* <!--@x--> */")
        index = write(tmp_path, "index.kit", "<style><!--@include style.css--></style>")
        assert compile_file(str(index)) == "<style>/* <!--@x--> */</style>"

    def test_bare_name_preferred_over_extension(self, tmp_path):
        """An extensionless file wins over foo.kit and is spliced raw"""
        write(tmp_path, "foo", "<!--@raw-->")
        write(tmp_path, "foo.kit", "compiled")
        index = write(tmp_path, "index.kit", "<!--@include foo-->")
        assert compile_file(str(index)) == "<!--@raw-->"

    def test_base64_include(self, tmp_path):
        """@import-base64 splices the base64 of the raw bytes"""
        write(tmp_path, "a.txt", "hi")
        index = write(tmp_path, "index.kit", "<!--@import-base64 a.txt-->")
        assert compile_file(str(index)) == "aGk="

    def test_base64_template_is_not_compiled(self, tmp_path):
        """Templates included as base64 are not compiled"""
        write(tmp_path, "t.kit", "<!--@x-->")
        index = write(tmp_path, "index.kit", "<!--@include-base64 t.kit-->")
        assert compile_file(str(index)) == "PCEtLUB4LS0+"

    def test_root_relative_include(self, tmp_path):
        """A leading slash resolves against root_dir"""
        write(tmp_path, "partials/_nav.kit", "nav")
        write(tmp_path, "pages/partials/_nav.kit", "wrong")
        page = write(tmp_path, "pages/about.kit", "<!--@include /partials/nav-->")
        assert compile_file(str(page), root_dir=str(tmp_path)) == "nav"

    def test_nested_includes_are_relative_to_their_file(self, tmp_path):
        """Includes inside an include resolve from that file's directory"""
        write(tmp_path, "parts/_outer.kit", "[<!--@include inner-->]")
        write(tmp_path, "parts/_inner.kit", "in")
        index = write(tmp_path, "index.kit", "<!--@include parts/outer-->")
        assert compile_file(str(index)) == "[in]"

    def test_include_not_found(self, tmp_path):
        """A missing include is located at its directive"""
        index = write(tmp_path, "index.kit", "\n<!--@include nothere-->")
        with pytest.raises(IncludeNotFound, match="`nothere`") as excinfo:
            compile_file(str(index))
        assert excinfo.value.line == 2
        assert excinfo.value.file == str(index)

    def test_empty_include_fails(self, tmp_path):
        """An include without specs raises"""
        index = write(tmp_path, "index.kit", "<!--@include-->")
        with pytest.raises(IncludeNotFound):
            compile_file(str(index))

    @pytest.mark.parametrize("spec_list", ["a,,b", "a,", " , a"])
    def test_blank_spec_in_list_fails(self, tmp_path, spec_list):
        """A blank entry in a spec list raises instead of being skipped"""
        write(tmp_path, "a.kit", "A")
        write(tmp_path, "b.kit", "B")
        index = write(tmp_path, "index.kit", f"<!--@include {spec_list}-->")
        with pytest.raises(IncludeNotFound, match="``"):
            compile_file(str(index))


class TestRecursion:
    """Test cycle detection"""

    def test_mutual_include(self, tmp_path):
        """a includes b, b includes a"""
        a = write(tmp_path, "a.kit", "<!--@include b-->")
        b = write(tmp_path, "b.kit", "\n<!--@include a-->")

        with pytest.raises(RecursiveInclude) as excinfo:
            compile_file(str(a))

        err = excinfo.value
        assert "`b.kit` is including parent file `a.kit`" in err.message
        assert err.file == str(b)
        assert (err.line, err.column) == (2, 1)
        assert err.trace == ((str(a), 1, 1),)
        assert isinstance(err.cause, RecursiveInclude)
        assert err.__cause__ is err.cause

    def test_self_include(self, tmp_path):
        """A file including itself is recursive"""
        a = write(tmp_path, "a.kit", "<!--@include a-->")
        with pytest.raises(RecursiveInclude):
            compile_file(str(a))

    def test_base64_self_include_is_recursive(self, tmp_path):
        """The cycle check applies to base64 includes of the current file too"""
        a = write(tmp_path, "a.kit", "<!--@include-base64 a.kit-->")
        with pytest.raises(RecursiveInclude, match="`a.kit` is including parent file `a.kit`"):
            compile_file(str(a))

    def test_base64_include_of_sibling(self, tmp_path):
        """A base64 include of a file outside the chain is allowed"""
        write(tmp_path, "b.kit", "B")
        a = write(tmp_path, "a.kit", "<!--@include-base64 b.kit-->")
        assert compile_file(str(a)) == "Qg=="

    def test_repeated_include_is_not_recursive(self, tmp_path):
        """Including the same file twice is allowed"""
        write(tmp_path, "_item.kit", "*")
        index = write(tmp_path, "index.kit", "<!--@include item, item--><!--@include item-->")
        assert compile_file(str(index)) == "*\n**"


class TestErrorLocations:
    """Test file/line/column decoration"""

    def test_top_level_location(self):
        """Errors carry file, line and column of the directive"""
        with pytest.raises(UndefinedVariable) as excinfo:
            compile("line one\n  x <!--@missing-->", file="page.kit")

        err = excinfo.value
        assert (err.file, err.line, err.column) == ("page.kit", 2, 5)
        assert str(err).startswith("page.kit:2:5: Undefined variable 'missing'")

    def test_unterminated_comment_on_line_3(self):
        """The unclosed comment is reported on its own line"""
        with pytest.raises(UnterminatedComment) as excinfo:
            compile("a\nb\n<!--@x\n")
        assert excinfo.value.line == 3

    def test_nested_location_is_preserved(self, tmp_path):
        """The error keeps the child's location; the parent is in the trace"""
        child = write(tmp_path, "_child.kit", "ok\n<!--@missing-->")
        index = write(tmp_path, "index.kit", "one\ntwo\n  <!--@include child-->")

        with pytest.raises(UndefinedVariable) as excinfo:
            compile_file(str(index))

        err = excinfo.value
        assert (err.file, err.line, err.column) == (str(child), 2, 1)
        assert err.trace == ((str(index), 3, 3),)
        assert err.cause.trace == ()

    def test_nested_unterminated_comment(self, tmp_path):
        """Scanner errors inside an include keep the include's location"""
        child = write(tmp_path, "_child.kit", "\n\n<!--@x")
        index = write(tmp_path, "index.kit", "<!--@include child-->")

        with pytest.raises(UnterminatedComment) as excinfo:
            compile_file(str(index))
        assert (excinfo.value.file, excinfo.value.line) == (str(child), 3)

    def test_read_failure_is_located(self):
        """Storage errors are wrapped in a located TurfError"""

        class BrokenStore(MemoryFileStore):
            def read_bytes(self, path):
                raise PermissionError(path)

        store = BrokenStore({"/site/_a.kit": "a"})
        with pytest.raises(TurfError) as excinfo:
            compile("x<!--@include a-->", file="/site/index.kit", filestore=store)

        err = excinfo.value
        assert (err.line, err.column) == (1, 2)
        assert isinstance(err.cause, PermissionError)


class TestFileStores:
    """Test compiling against alternative stores"""

    def test_memory_store(self):
        """Includes resolve against an in-memory store"""
        store = MemoryFileStore({"/site/_nav.kit": "<nav><!--@page--></nav>"})
        source = "<!--@page Home-->\n<!--@include nav-->"
        assert compile(source, file="/site/index.kit", filestore=store) == "<nav>Home</nav>"

    def test_directories_are_not_candidates(self, tmp_path):
        """A directory named like a candidate is skipped"""
        (tmp_path / "foo").mkdir()
        write(tmp_path, "foo.kit", "file")
        assert LocalFileStore().exists(str(tmp_path / "foo")) is False
        index = write(tmp_path, "index.kit", "<!--@include foo-->")
        assert compile_file(str(index)) == "file"
