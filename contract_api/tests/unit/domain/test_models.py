import pytest
from pydantic import TypeAdapter, ValidationError

from contract_api.app.domain.models import (
    AnnotationList,
    CompiledQuery,
    CorrectionItem,
    ExistsFilter,
    FilterClause,
    ProvincePair,
    SearchParameters,
    SortSpec,
    TermsFilter,
)


def test_search_parameters_accept_from_alias():
    p = SearchParameters.model_validate({"from": 30, "size": 5})
    assert p.from_ == 30


def test_search_parameters_reject_negative_paging():
    with pytest.raises(ValidationError):
        SearchParameters(size=-1)


def test_filter_clause_discriminated_by_kind():
    """
    kind 태그로 filter 절 타입이 결정된다.
    """
    adapter = TypeAdapter(FilterClause)

    terms = adapter.validate_python({"kind": "terms", "field": "metadata.resource", "values": ["gold"]})
    exists = adapter.validate_python({"kind": "exists", "field": "annotations_string"})

    assert isinstance(terms, TermsFilter)
    assert isinstance(exists, ExistsFilter)
    assert exists.to_dsl() == {"exists": {"field": "annotations_string"}}


def test_compiled_query_filter_only():
    q = CompiledQuery(
        filters=(ExistsFilter(field="annotations_string"),),
        sort=SortSpec(field="metadata.signature_date"),
    )

    assert q.to_query_dsl() == {"bool": {"filter": [{"exists": {"field": "annotations_string"}}]}}


@pytest.mark.parametrize(
    "pair, expected",
    [
        ({"province": "1", "district": "10"}, (1, 10)),
        ({"province": 1, "district": 10}, (1, 10)),
        ({"province": 0, "district": 5}, None),
        ({"province": "1", "district": None}, None),
        ({"province": "a", "district": "2"}, None),
    ],
)
def test_province_pair_ids(pair, expected):
    assert ProvincePair.model_validate(pair).ids() == expected


def test_correction_item_requires_key():
    with pytest.raises(ValidationError):
        CorrectionItem(key="", value="gold")


def test_annotation_list_defaults():
    result = AnnotationList(total=0)
    assert result.items == []
    assert result.groups == []
