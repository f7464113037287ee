import pytest

from contract_api.app.domain.vocabulary import (
    CONTRACT_TYPES,
    DOCUMENT_TYPES,
    RESOURCES,
    Vocabulary,
    table,
    to_display,
    to_raw,
)


def test_to_display_maps_known_raw_value():
    assert to_display(Vocabulary.resources, "gold") == "Алт"
    assert to_display(Vocabulary.document_types, "Contract") == "Гэрээ"


def test_to_raw_maps_known_label():
    assert to_raw(Vocabulary.contract_types, "Хөрөнгө оруулалтын гэрээ") == "Investment Agreement"


@pytest.mark.parametrize("vocabulary", list(Vocabulary))
def test_unmapped_values_pass_through(vocabulary):
    """
    매핑이 없는 값은 양방향 모두 그대로 돌려준다.
    """
    assert to_display(vocabulary, "unknown-value") == "unknown-value"
    assert to_raw(vocabulary, "unknown-value") == "unknown-value"


@pytest.mark.parametrize(
    "vocabulary, labels",
    [
        (Vocabulary.resources, list(RESOURCES.values()) + ["Алт", "free text"]),
        (Vocabulary.contract_types, list(CONTRACT_TYPES.values())),
        (Vocabulary.document_types, list(DOCUMENT_TYPES.values())),
    ],
)
def test_round_trip_is_stable(vocabulary, labels):
    """
    to_raw(to_display(to_raw(label))) == to_raw(label)
    """
    for label in labels:
        raw = to_raw(vocabulary, label)
        assert to_raw(vocabulary, to_display(vocabulary, raw)) == raw


def test_table_is_read_only():
    with pytest.raises(TypeError):
        table(Vocabulary.resources)["gold"] = "changed"
