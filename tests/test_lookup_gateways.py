import json

import httpx
import pytest

from topoauth.core.config import ServiceSettings
from topoauth.core.gateway import (
    CoreServiceLookupGateway,
    GatewayError,
    InMemoryLookupGateway,
    ModelLookupGateway,
    Schema,
    get_lookup_gateway,
)


# ------------------------------------------------------------
# in-memory
# ------------------------------------------------------------
def test_memory_gateway_conditions(gateway):
    assert [s.id for s in gateway.find_schemas({"bk_obj_id": "host"})] == [7]
    assert [s.id for s in gateway.find_schemas({"bk_obj_id": {"$in": ["process", "host"]}})] == [7, 9]
    # path ids arrive as strings
    assert [a.object_id for a in gateway.find_attributes({"id": "101"})] == ["process"]
    assert gateway.find_attributes({"id": "١٠١"}) == []
    assert gateway.find_attributes({"id": "²"}) == []
    assert gateway.find_instance_association({"id": 999}) is None
    assert gateway.find_schemas({"bk_obj_id": "nope"}) == []


def test_memory_gateway_rejects_unknown_fields_and_operators(gateway):
    with pytest.raises(GatewayError):
        gateway.find_schemas({"bk_supplier_account": "0"})
    with pytest.raises(GatewayError):
        gateway.find_schemas({"bk_obj_id": {"$regex": "ho"}})
    with pytest.raises(GatewayError):
        gateway.find_schemas({"bk_obj_id": {"$in": "host"}})


def test_gateways_satisfy_protocol(gateway):
    assert isinstance(gateway, ModelLookupGateway)
    assert isinstance(CoreServiceLookupGateway("http://core"), ModelLookupGateway)


def test_fixture_file_json(tmp_path):
    path = tmp_path / "lookup.json"
    path.write_text(json.dumps({"schemas": [{"id": "7", "bk_obj_id": "host"}]}), encoding="utf-8")

    gw = InMemoryLookupGateway.from_file(path)

    assert gw.find_schemas({"bk_obj_id": "host"}) == [Schema(id=7, object_id="host")]


def test_fixture_file_yaml(tmp_path):
    path = tmp_path / "lookup.yaml"
    path.write_text(
        "association_defs:\n"
        "  - {id: 1, bk_obj_asst_id: set_bk_mainline_biz, bk_obj_id: set, bk_asst_obj_id: biz, bk_asst_id: bk_mainline}\n",
        encoding="utf-8",
    )

    gw = InMemoryLookupGateway.from_file(path)

    (asst,) = gw.find_association_defs({"bk_asst_id": "bk_mainline"})
    assert (asst.object_id, asst.asst_object_id) == ("set", "biz")


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "schemas: {id: 1}\n",
        "schemas:\n  - {bk_obj_id: host}\n",
        "schemas: [unclosed\n",
    ],
)
def test_fixture_file_invalid(tmp_path, content):
    path = tmp_path / "lookup.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(GatewayError):
        InMemoryLookupGateway.from_file(path)


def test_fixture_file_missing(tmp_path):
    with pytest.raises(GatewayError):
        InMemoryLookupGateway.from_file(tmp_path / "absent.yaml")


def test_get_lookup_gateway_modes(tmp_path):
    path = tmp_path / "lookup.json"
    path.write_text('{"schemas": [{"id": 1, "bk_obj_id": "biz"}]}', encoding="utf-8")

    empty = get_lookup_gateway(ServiceSettings())
    from_file = get_lookup_gateway(ServiceSettings(lookup_fixture=str(path)))
    remote = get_lookup_gateway(ServiceSettings(lookup_mode="core_service", core_url="http://core:8080"))

    assert empty.find_schemas({}) == []
    assert [s.object_id for s in from_file.find_schemas({})] == ["biz"]
    assert isinstance(remote, CoreServiceLookupGateway)
    assert remote.base_url == "http://core:8080"


# ------------------------------------------------------------
# core service (httpx)
# ------------------------------------------------------------
def _core(handler) -> CoreServiceLookupGateway:
    client = httpx.Client(base_url="http://core", transport=httpx.MockTransport(handler))
    return CoreServiceLookupGateway("http://core", client=client)


def test_core_service_reads_envelope():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, json.loads(request.content)))
        return httpx.Response(
            200,
            json={
                "result": True,
                "message": "",
                "data": {"count": 1, "info": [{"id": 7, "bk_obj_id": "host", "bk_supplier_account": "0"}]},
            },
        )

    gw = _core(handler)

    assert gw.find_schemas({"bk_obj_id": "host"}) == [Schema(id=7, object_id="host")]
    assert seen == [("POST", "/api/v3/read/model", {"condition": {"bk_obj_id": "host"}})]


def test_core_service_endpoints():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"result": True, "data": {"info": []}})

    gw = _core(handler)
    gw.find_association_defs({"id": 1})
    gw.find_attributes({"id": 1})
    gw.find_attribute_groups({"id": 1})

    assert gw.find_instance_association({"id": 1}) is None
    assert paths == [
        "/api/v3/read/model/association",
        "/api/v3/read/model/attributes",
        "/api/v3/read/model/group",
        "/api/v3/read/instanceassociation",
    ]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json={"result": False, "message": "no permission"}),
        httpx.Response(200, json={"result": True, "data": {"info": {"id": 1}}}),
        httpx.Response(200, json={"result": True, "data": {"info": [{"bk_obj_id": "host"}]}}),
    ],
)
def test_core_service_failures(response):
    gw = _core(lambda request: response)

    with pytest.raises(GatewayError):
        gw.find_schemas({"bk_obj_id": "host"})


def test_core_service_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GatewayError, match="refused"):
        _core(handler).find_schemas({"bk_obj_id": "host"})
