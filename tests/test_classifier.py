import logging

import pytest

from kubechart.assembly.classifier import ResourceClassifier, classify
from kubechart.assembly.reader import read_documents
from kubechart.core.errors import SchemaError
from kubechart.core.models import Category, Document


def _doc(text: str) -> Document:
    return read_documents(text)[0]


@pytest.mark.parametrize("kind, expected", [
    ("CustomResourceDefinition", Category.CRD),
    ("RoleBinding", Category.ROLE_BINDING),
    ("ClusterRoleBinding", Category.ROLE_BINDING),
    ("TenantRolebinding", Category.ROLE_BINDING),
    ("Namespace", Category.NAMESPACE),
    ("Deployment", Category.GENERIC),
    ("ClusterRole", Category.GENERIC),
    ("ServiceAccount", Category.GENERIC),
    # Exact matches are case-sensitive and whole-word
    ("namespace", Category.GENERIC),
    ("CustomResourceDefinitionList", Category.GENERIC),
    ("NamespaceQuota", Category.GENERIC),
])
def test_kind_routing(kind, expected):
    """
    ROUTING TEST: Exact kinds pick their category, any kind containing
    'Rolebinding' (case-insensitive) is a binding, the rest is generic.
    """
    assert classify(_doc(f"kind: {kind}\n")) is expected


def test_classification_is_deterministic(scenario_stream):
    classifier = ResourceClassifier()
    docs = read_documents(scenario_stream)

    first = [classifier.classify(d) for d in docs]
    second = [classifier.classify(d) for d in docs]

    assert first == second == [Category.CRD, Category.ROLE_BINDING, Category.NAMESPACE, Category.GENERIC]


@pytest.mark.parametrize("text", [
    "metadata:\n  name: nameless\n",
    "kind: ''\n",
    "kind: 42\n",
    "kind:\n",
    "- just\n- a list\n",
])
def test_unroutable_documents_raise_schema_error(text):
    """Documents without a usable kind are rejected, never guessed."""
    with pytest.raises(SchemaError) as excinfo:
        classify(_doc(text))
    assert excinfo.value.field == "kind"
    assert excinfo.value.index == 0


def test_rejection_is_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="kubechart.validator"):
        with pytest.raises(SchemaError):
            classify(_doc("metadata:\n  name: nameless\n"))

    assert any("Document #0 rejected" in r.getMessage() for r in caplog.records)
