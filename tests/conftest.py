import pytest
from fastapi.testclient import TestClient

from topoauth.api.main import app
from topoauth.core.auth import RequestContext, resolve
from topoauth.core.gateway import InMemoryLookupGateway

# Platform-shaped records, the same shape a fixture file or the core service returns.
FIXTURE = {
    "schemas": [
        {"id": 7, "bk_obj_id": "host", "bk_obj_name": "Host", "metadata": {"label": {"bk_biz_id": "0"}}},
        {"id": 9, "bk_obj_id": "process", "bk_obj_name": "Process"},
        {"id": 11, "bk_obj_id": "biz", "bk_obj_name": "Business"},
        {"id": 12, "bk_obj_id": "set", "bk_obj_name": "Set"},
        {"id": 13, "bk_obj_id": "module", "bk_obj_name": "Module"},
        {"id": 20, "bk_obj_id": "switch", "metadata": {"label": {"bk_biz_id": "3"}}},
        {"id": 30, "bk_obj_id": "broken", "metadata": {"label": {"bk_biz_id": "abc"}}},
    ],
    "association_defs": [
        {"id": 1, "bk_obj_asst_id": "set_bk_mainline_biz", "bk_obj_id": "set", "bk_asst_obj_id": "biz", "bk_asst_id": "bk_mainline"},
        {"id": 2, "bk_obj_asst_id": "module_bk_mainline_set", "bk_obj_id": "module", "bk_asst_obj_id": "set", "bk_asst_id": "bk_mainline"},
        {"id": 3, "bk_obj_asst_id": "host_bk_mainline_module", "bk_obj_id": "host", "bk_asst_obj_id": "module", "bk_asst_id": "bk_mainline"},
        {"id": 10, "bk_obj_asst_id": "host_run_process", "bk_obj_id": "host", "bk_asst_obj_id": "process", "bk_asst_id": "run"},
        {"id": 11, "bk_obj_asst_id": "switch_connect_switch", "bk_obj_id": "switch", "bk_asst_obj_id": "switch", "bk_asst_id": "connect"},
    ],
    "attributes": [
        {"id": 100, "bk_obj_id": "host", "bk_property_id": "bk_host_name", "bk_property_group": "default"},
        {"id": 101, "bk_obj_id": "process", "bk_property_id": "bk_func_name", "bk_property_group": "default"},
    ],
    "attribute_groups": [
        {"id": 200, "bk_obj_id": "host", "bk_group_id": "default", "bk_group_name": "Default"},
        {"id": 201, "bk_obj_id": "host", "bk_group_id": "hardware", "bk_group_name": "Hardware"},
        {"id": 202, "bk_obj_id": "process", "bk_group_id": "default", "bk_group_name": "Default"},
    ],
    "instance_associations": [
        {"id": 300, "bk_obj_asst_id": "host_run_process", "bk_obj_id": "host", "bk_inst_id": 1,
         "bk_asst_obj_id": "process", "bk_asst_inst_id": 2, "bk_asst_id": "run"},
        {"id": 301, "bk_obj_asst_id": "switch_connect_switch", "bk_obj_id": "switch", "bk_inst_id": 5,
         "bk_asst_obj_id": "switch", "bk_asst_inst_id": 5, "bk_asst_id": "connect"},
    ],
}


@pytest.fixture()
def gateway():
    return InMemoryLookupGateway.from_mapping(FIXTURE)


@pytest.fixture()
def resolve_call(gateway):
    def _run(method, path, body=None, metadata=None, gw=None):
        ctx = RequestContext.build(method, path, body=body, metadata=metadata)
        return resolve(ctx, gw or gateway)

    return _run


@pytest.fixture()
def client(gateway, monkeypatch):
    monkeypatch.setattr(app.state, "gateway", gateway)
    return TestClient(app)
