#!/usr/bin/env python3

import pytest

from flatport.extractor import extract_elements
from flatport.models import SourceText
from flatport.patterns import compile_patterns


@pytest.fixture
def patterns():
    return compile_patterns()


def test_extracts_single_line_definitions(patterns):
    source = SourceText.from_text(
        """#include <stdio.h>
static int counter = 0;

int add(int a, int b) {
    return a + b;
}

void reset(void) {
    counter = 0;
}
"""
    )
    elements = extract_elements(source, patterns)

    assert [e.identity for e in elements] == ["Function_3", "Function_7"]
    assert [e.origin_line for e in elements] == [3, 7]
    assert [e.name for e in elements] == ["add", "reset"]
    assert elements[0].raw_text == "int add(int a, int b) {"


def test_raw_text_is_verbatim(patterns):
    line = "  unsigned   long  hash (const char *s)  {   "
    elements = extract_elements(SourceText(lines=(line,)), patterns)
    assert len(elements) == 1
    assert elements[0].raw_text == line


def test_ignores_declarations_and_statements(patterns):
    source = SourceText.from_text(
        """int add(int a, int b);
x = compute(1, 2);
if (x) {
struct point {
"""
    )
    assert extract_elements(source, patterns) == []


def test_multi_line_signature_not_detected(patterns):
    source = SourceText.from_text(
        """int
add(int a, int b)
{
    return a + b;
}
"""
    )
    assert extract_elements(source, patterns) == []


def test_identities_unique(patterns):
    source = SourceText(lines=("int f() {", "int f() {", "int f() {"))
    identities = [e.identity for e in extract_elements(source, patterns)]
    assert len(set(identities)) == 3


def test_custom_pattern_without_name_group():
    patterns = compile_patterns(function=r"^fn\s+\w+\(.*\)\s*\{")
    source = SourceText(lines=("fn main() {", "int f() {"))
    elements = extract_elements(source, patterns)
    assert [e.identity for e in elements] == ["Function_0"]
    assert elements[0].name is None
