"""Tests for documentation comment parsing."""

from wsdlgen.generator.docblock import DocBlock, extract_summary, extract_tag, first_tag

PHP_COMMENT = """/**
 * Add two numbers
 * and return the sum.
 *
 * @param int $a first operand
 * @param integer $b
 * @return int
 */"""


def describe_extract_summary():
    def joins_prose_lines(expect):
        expect(extract_summary(PHP_COMMENT)) == "Add two numbers and return the sum."

    def reads_plain_docstrings(expect):
        doc = """Add two numbers.

        More detail here.

        @return int
        """
        expect(extract_summary(doc)) == "Add two numbers. More detail here."

    def stops_at_first_tag(expect):
        expect(extract_summary("@return int\nnot a summary")) == ""

    def handles_missing_comment(expect):
        expect(extract_summary(None)) == ""
        expect(extract_summary("")) == ""

    def handles_single_line_block(expect):
        expect(extract_summary("/** Short description. */")) == "Short description."


def describe_extract_tag():
    def returns_values_in_order(expect):
        expect(extract_tag(PHP_COMMENT, "param")) == ["int", "integer"]

    def takes_only_first_token(expect):
        expect(extract_tag(" * @param string $name the name", "param")) == ["string"]

    def returns_true_for_bare_tags(expect):
        expect(extract_tag(" * @ignoreInWsdl", "ignoreInWsdl")) == [True]

    def ignores_closing_marker(expect):
        expect(extract_tag("/** @ignoreInWsdl */", "ignoreInWsdl")) == [True]
        expect(extract_tag("/** @return int */", "return")) == ["int"]

    def returns_empty_for_missing_tag(expect):
        expect(extract_tag(PHP_COMMENT, "var")) == []
        expect(extract_tag(None, "var")) == []

    def does_not_match_tag_prefixes(expect):
        expect(extract_tag(" * @parameter int", "param")) == []

    def reads_undecorated_lines(expect):
        expect(extract_tag("    @var Widget[]", "var")) == ["Widget[]"]

    def ignores_tags_inside_prose(expect):
        expect(extract_tag("Mail me at a@b.c for details", "b.c")) == []


def describe_first_tag():
    def returns_first_value(expect):
        expect(first_tag(PHP_COMMENT, "return")) == "int"

    def returns_none_when_absent(expect):
        expect(first_tag(PHP_COMMENT, "var")) == None


def describe_docblock():
    def collects_all_tags(expect):
        doc = DocBlock.parse(PHP_COMMENT)
        expect(doc.summary) == "Add two numbers and return the sum."
        expect(doc.get("param")) == ["int", "integer"]
        expect(doc.first("return")) == "int"
        expect(doc.has("return")) == True
        expect(doc.has("ignoreInWsdl")) == False

    def parses_empty_comment(expect):
        doc = DocBlock.parse(None)
        expect(doc.summary) == ""
        expect(doc.tags) == {}
        expect(doc.first("return")) == None
