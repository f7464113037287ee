import pytest

from contract_api.app.domain.decoder import (
    decode_annotation,
    decode_annotations,
    decode_hit,
    decode_hits,
)
from contract_api.app.platform.exceptions import DecodeError


def test_decode_hit_maps_source_fields(raw_hit):
    hit = decode_hit(raw_hit())

    assert hit.id == "1042"
    assert hit.score == 3.2
    assert hit.metadata.contract_name == "Gold mining agreement"
    # 숫자로 색인된 연도도 문자열로 맞춘다
    assert hit.metadata.signature_year == "2019"
    assert hit.text.startswith("First line")
    assert hit.annotations_text == "royalty 5%"
    assert hit.highlight == {}


def test_decode_hit_keeps_highlight(raw_hit):
    raw = raw_hit()
    raw["highlight"] = {"pdf_text_string": ["<strong>gold</strong>"]}

    assert decode_hit(raw).highlight == {"pdf_text_string": ["<strong>gold</strong>"]}


def test_null_arrays_become_empty(raw_hit):
    hit = decode_hit(raw_hit(resource=None, provinces=None, government_entity=None))

    assert hit.metadata.resource == []
    assert hit.metadata.provinces == []
    assert hit.metadata.government_entity == []


@pytest.mark.parametrize(
    "raw, reason",
    [
        ({"_id": "1"}, "missing _source"),
        ({"_id": "1", "_source": {}}, "missing metadata"),
        ({"_source": {"metadata": {}}}, "missing _id"),
    ],
)
def test_decode_hit_rejects_malformed(raw, reason):
    with pytest.raises(DecodeError) as e:
        decode_hit(raw)
    assert e.value.reason == reason


def test_decode_hit_rejects_invalid_metadata(raw_hit):
    raw = raw_hit()
    del raw["_source"]["metadata"]["contract_name"]

    with pytest.raises(DecodeError) as e:
        decode_hit(raw)
    assert e.value.hit_id == "1042"


def test_decode_hits_skips_only_broken_hits(raw_hit, caplog):
    broken = {"_id": "bad", "_source": {"pdf_text_string": "no metadata"}}

    hits, failures = decode_hits([raw_hit("1"), broken, raw_hit("2")])

    assert [h.id for h in hits] == ["1", "2"]
    assert [f.hit_id for f in failures] == ["bad"]
    assert "skip hit" in caplog.text


def test_decode_annotation_accepts_legacy_keys():
    a = decode_annotation({
        "_id": "a1",
        "_source": {"contract_id": 1042, "string": "5% royalty", "page": 3, "category": "Royalty", "shapes": {"x": 1}},
    })

    assert a.id == "a1"
    assert a.contract_id == "1042"
    assert a.text == "5% royalty"
    assert a.page_no == 3
    assert a.shapes == [{"x": 1}]


def test_decode_annotations_isolates_failures():
    items, failures = decode_annotations([
        {"_id": "a1", "_source": {"text": "t", "page_no": 1}},
        {"_id": "a2", "_source": {"page_no": "not-a-page"}},
        {"_id": "a3"},
    ])

    assert [a.id for a in items] == ["a1"]
    assert [f.hit_id for f in failures] == ["a2", "a3"]
