import pytest

from pvsadm.spec import Source, Spec, TargetItem, dump_specs, load_specs


def _sample():
    return Spec(
        source=Source(
            bucket="src-bucket",
            cos="src-cos",
            object="img.*",
            storage_class="smart",
            region="us-east",
        ),
        target=[
            TargetItem(bucket="dst-a", storage_class="cold", region="jp-tok"),
            TargetItem(bucket="dst-b", storage_class="vault", region="eu-de"),
        ],
    )


def test_to_dict_uses_yaml_keys():
    data = _sample().to_dict()
    assert data["source"]["storageClass"] == "smart"
    assert data["target"][1]["bucket"] == "dst-b"
    assert set(data) == {"source", "target"}


def test_dict_round_trip():
    spec = _sample()
    assert Spec.from_dict(spec.to_dict()) == spec


def test_yaml_round_trip():
    specs = [_sample(), Spec()]
    assert load_specs(dump_specs(specs)) == specs


def test_dump_contains_storage_class_key():
    assert "storageClass:" in dump_specs([_sample()])


def test_load_from_handwritten_yaml():
    text = """
- source:
    bucket: b1
    cos: c1
    storageClass: standard
    region: ca-tor
  target:
    - bucket: t1
      storageClass: cold
      region: au-syd
"""
    (spec,) = load_specs(text)
    assert spec.source.bucket == "b1"
    assert spec.source.object == ""
    assert spec.target == [TargetItem(bucket="t1", storage_class="cold", region="au-syd")]


def test_load_empty_document():
    assert load_specs("") == []


def test_load_rejects_mapping_document():
    with pytest.raises(ValueError):
        load_specs("source: {}\n")


def test_from_dict_rejects_non_list_target():
    with pytest.raises(ValueError):
        Spec.from_dict({"target": "oops"})