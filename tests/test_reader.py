#!/usr/bin/env python3
"""
KUBECHART READER SUITE
----------------------
Stream slicing: boundaries, empty segments, BOM/CRLF input and error positions.

Author: KubeChart Team
Date: 2026-10-18
"""

import pytest

from kubechart.assembly.reader import StreamReader, read_documents
from kubechart.core.errors import ParseError


def test_scenario_keeps_source_order(scenario_stream):
    """ORDER TEST: Documents come back in stream order with dense indices."""
    docs = read_documents(scenario_stream)

    assert [d.kind for d in docs] == ["CustomResourceDefinition", "RoleBinding", "Namespace", "Deployment"]
    assert [d.index for d in docs] == [0, 1, 2, 3]


def test_empty_and_comment_only_segments_are_skipped():
    """
    Blank and comment-only segments neither produce a Document
    nor consume an index.
    """
    stream = (
        "---\n"
        "# Source: chart/templates/sa.yaml\n"
        "---\n"
        "\n"
        "---\n"
        "kind: ServiceAccount\n"
        "metadata:\n"
        "  name: sa\n"
        "---\n"
        "---   # trailing marker comment\n"
        "kind: ConfigMap\n"
    )
    docs = read_documents(stream)

    assert [d.kind for d in docs] == ["ServiceAccount", "ConfigMap"]
    assert [d.index for d in docs] == [0, 1]


def test_empty_stream_yields_nothing():
    assert read_documents("") == []
    assert read_documents("---\n---\n") == []


def test_explicit_null_document_is_skipped():
    """'~' parses to None and is dropped like an empty segment."""
    docs = read_documents("kind: A\n---\n~\n---\nkind: B\n")
    assert [d.kind for d in docs] == ["A", "B"]
    assert [d.index for d in docs] == [0, 1]


def test_document_end_marker_is_a_boundary():
    docs = read_documents("kind: A\n...\n---\nkind: B\n")
    assert [d.kind for d in docs] == ["A", "B"]


def test_bom_and_crlf_are_normalised():
    """Streams saved on Windows editors still split cleanly."""
    docs = read_documents("\ufeffkind: A\r\n---\r\nkind: B\r\n")
    assert [d.kind for d in docs] == ["A", "B"]


def test_comments_and_key_order_survive_parsing():
    docs = read_documents("# header\nkind: A\nzeta: 1\nalpha: 2\n")
    assert list(docs[0].body.keys()) == ["kind", "zeta", "alpha"]
    assert "# header" in docs[0].source


def test_malformed_document_reports_its_ordinal():
    """
    ERROR TEST: A syntax error names the failing document and its
    line in the original stream.
    """
    stream = "kind: A\n---\nkind: B\n---\nkind: C\nitems: [unclosed\n"

    with pytest.raises(ParseError) as excinfo:
        StreamReader().read(stream)

    assert excinfo.value.index == 2
    assert excinfo.value.line is not None and excinfo.value.line >= 5
    assert "#2" in str(excinfo.value)


def test_non_mapping_documents_are_still_returned():
    # Routing rejects them later; the reader only cares about syntax
    docs = read_documents("- a\n- b\n")
    assert docs[0].kind is None
    assert list(docs[0].body) == ["a", "b"]


@pytest.mark.parametrize("stream", [
    "kind: A\n--- kind: B\n",
    "kind: A\n--- !!map\nkind: B\n",
    "--- kind: A\n--- kind: B\n",
])
def test_content_on_the_start_marker_line_belongs_to_the_next_document(stream):
    """
    BOUNDARY TEST: A '---' line may carry a tag or the first key of the
    document it opens; both stay with that document.
    """
    docs = read_documents(stream)
    assert [d.kind for d in docs] == ["A", "B"]
    assert [d.index for d in docs] == [0, 1]


def test_malformed_inline_document_reports_its_own_line():
    with pytest.raises(ParseError) as excinfo:
        read_documents("kind: A\n--- kind: [broken\n")
    assert excinfo.value.index == 1
    assert excinfo.value.line is not None and excinfo.value.line >= 2
