#!/usr/bin/env python3

import pytest

from flatport.models import CodeElement
from flatport.reassembler import reassemble


@pytest.fixture
def elements():
    return [
        CodeElement(identity="Function_0", origin_line=0, raw_text="int f() {", name="f"),
        CodeElement(identity="Function_4", origin_line=4, raw_text="int g() {", name="g"),
    ]


def test_marker_precedes_each_line(elements):
    output = reassemble(["Function_0", "Function_4"], elements)
    assert output.lines == (
        "// Function start: Function_0",
        "int f() {",
        "// Function start: Function_4",
        "int g() {",
    )


def test_follows_given_order(elements):
    output = reassemble(["Function_4", "Function_0"], elements)
    assert output.lines[1] == "int g() {"
    assert output.lines[3] == "int f() {"


def test_unknown_identity(elements):
    with pytest.raises(ValueError, match="Function_9"):
        reassemble(["Function_9"], elements)


def test_empty_order(elements):
    assert reassemble([], elements).render() == ""
