import re
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from pvsadm.resources import (
    ImageClient,
    InstanceClient,
    KeyClient,
    NetworkClient,
    VolumeClient,
)

NOW = datetime.now(timezone.utc)
OLD = NOW - timedelta(hours=10)
RECENT = NOW - timedelta(minutes=5)


class FakeApi:
    def __init__(self, listing=None):
        self.listing = listing
        self.calls = []

    def get_all(self):
        return self.listing

    def get(self, ident):
        self.calls.append(("get", ident))
        return {"id": ident}

    def delete(self, ident):
        self.calls.append(("delete", ident))

    def delete_volume(self, ident):
        self.calls.append(("delete_volume", ident))

    def create_cos_image(self, body):
        self.calls.append(("create_cos_image", body))
        return {"id": "job-1"}

    def create(self, body):
        self.calls.append(("create", body))
        return body

    def get_all_public(self):
        return "public"

    def create_port(self, network_id, params):
        self.calls.append(("create_port", network_id, params))
        return params

    def delete_port(self, network_id, port_id):
        self.calls.append(("delete_port", network_id, port_id))

    def get_port(self, network_id, port_id):
        return (network_id, port_id)

    def get_all_ports(self, network_id):
        return {"ports": [network_id]}


def image(name, created):
    return SimpleNamespace(name=name, image_id=name + "-id", creation_date=created)


def test_images_filtered_by_expr_and_window():
    api = FakeApi({"images": [image("rhel-old", OLD), image("rhel-new", RECENT), image("centos", OLD)]})
    client = ImageClient(api, "ws")
    result = client.get_all_purgeable(timedelta(hours=1), timedelta(0), "^rhel")
    assert [img.name for img in result] == ["rhel-old"]


def test_images_no_window_and_no_expr_returns_all():
    images = [image("a", OLD), image("b", RECENT)]
    client = ImageClient(FakeApi({"images": images}))
    assert client.get_all_purgeable(timedelta(0), timedelta(0), "") == images


def test_images_both_before_and_since_returns_nothing():
    client = ImageClient(FakeApi({"images": [image("a", OLD)]}))
    assert client.get_all_purgeable(timedelta(hours=1), timedelta(hours=1), "") == []


def test_image_by_name_found_and_missing():
    target = image("b", OLD)
    client = ImageClient(FakeApi({"images": [image("a", OLD), target]}))
    assert client.get_image_by_name("b") is target
    assert client.get_image_by_name("zzz") is None


def test_import_image_builds_body():
    api = FakeApi()
    client = ImageClient(api)
    job = client.import_image("img", "file.ova.gz", "us-south", "", "", "bkt", "", "private")
    assert job == {"id": "job-1"}
    (_, body), = api.calls
    assert body == {
        "imageName": "img",
        "imageFilename": "file.ova.gz",
        "region": "us-south",
        "bucketName": "bkt",
        "bucketAccess": "private",
    }


def test_import_image_includes_keys_when_given():
    api = FakeApi()
    ImageClient(api).import_image("img", "f", "r", "access-id", "secret", "bkt", "tier1", "private")
    body = api.calls[0][1]
    assert body["accessKey"] == "access-id"
    assert body["secretKey"] == "secret"
    assert body["storageType"] == "tier1"


def test_image_delegation():
    api = FakeApi()
    client = ImageClient(api)
    assert client.get("x") == {"id": "x"}
    client.delete("x")
    assert api.calls == [("get", "x"), ("delete", "x")]


def test_instances_since_window_with_dict_records():
    instances = [
        {"serverName": "k8s-cluster-1", "creationDate": RECENT.isoformat()},
        {"serverName": "k8s-cluster-2", "creationDate": OLD.isoformat()},
        {"serverName": "other", "creationDate": RECENT.isoformat()},
    ]
    client = InstanceClient(FakeApi({"pvmInstances": instances}))
    result = client.get_all_purgeable(timedelta(0), timedelta(hours=1), "^k8s-cluster-.*")
    assert result == [instances[0]]


def test_instance_delete_delegates():
    api = FakeApi()
    InstanceClient(api).delete("vm-1")
    assert api.calls == [("delete", "vm-1")]


def test_keys_return_names():
    keys = [
        SimpleNamespace(name="rdr-a", creation_date=OLD),
        SimpleNamespace(name="rdr-b", creation_date=RECENT),
        SimpleNamespace(name="mine", creation_date=OLD),
    ]
    client = KeyClient(FakeApi({"ssh_keys": keys}))
    assert client.get_all_purgeable(timedelta(hours=1), timedelta(0), "^rdr-.*") == ["rdr-a"]
    assert client.get_all_purgeable(timedelta(0), timedelta(0), "") == ["rdr-a", "rdr-b", "mine"]


def test_invalid_regex_raises():
    client = KeyClient(FakeApi({"sshKeys": [SimpleNamespace(name="a", creation_date=OLD)]}))
    with pytest.raises(re.error):
        client.get_all_purgeable(timedelta(0), timedelta(0), "(")


def test_networks_filter():
    nets = [{"name": "pub-net"}, {"name": "priv-net"}, {"name": "other"}]
    client = NetworkClient(FakeApi({"networks": nets}))
    assert client.get_all_purgeable("net$") == nets[:2]
    assert client.get_all_purgeable("") == nets


def test_network_ports_delegate():
    api = FakeApi()
    client = NetworkClient(api)
    assert client.get_all_ports("n1") == {"ports": ["n1"]}
    assert client.get_port("n1", "p1") == ("n1", "p1")
    assert client.get_all_public() == "public"
    client.delete_port("n1", "p1")
    assert client.create_port("n1", {"ip": "x"}) == {"ip": "x"}
    assert api.calls == [("delete_port", "n1", "p1"), ("create_port", "n1", {"ip": "x"})]


def test_volumes_by_last_update_date():
    volumes = [
        {"name": "vol-a", "lastUpdateDate": OLD.strftime("%Y-%m-%dT%H:%M:%S.000Z")},
        {"name": "vol-b", "lastUpdateDate": RECENT.strftime("%Y-%m-%dT%H:%M:%S.000Z")},
    ]
    client = VolumeClient(FakeApi({"volumes": volumes}))
    assert client.get_all_purgeable_by_last_update_date(timedelta(hours=1), timedelta(0), "") == [volumes[0]]
    assert client.get_all_purgeable_by_last_update_date(timedelta(0), timedelta(hours=1), "") == [volumes[1]]
    assert client.get_all_purgeable_by_last_update_date(timedelta(0), timedelta(0), "b$") == [volumes[1]]


def test_volume_delete_delegates():
    api = FakeApi()
    VolumeClient(api).delete_volume("v1")
    assert api.calls == [("delete_volume", "v1")]