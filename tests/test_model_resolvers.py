import pytest

from topoauth.core.auth import (
    Action,
    Item,
    ModelLookupError,
    ParameterError,
    ResourceAttribute,
    ResourceType,
)

BIZ_3 = {"label": {"bk_biz_id": "3"}}
HOST_LAYER = (Item(type=ResourceType.MODEL, instance_id=7),)
PROCESS_LAYER = (Item(type=ResourceType.MODEL, instance_id=9),)


# ------------------------------------------------------------
# models, classifications, topology graphics
# ------------------------------------------------------------
@pytest.mark.parametrize(
    "method,path,expected",
    [
        ("POST", "/api/v3/create/object", (ResourceType.MODEL, Action.CREATE, 0)),
        ("DELETE", "/api/v3/delete/object/7", (ResourceType.MODEL, Action.DELETE, 7)),
        ("PUT", "/api/v3/update/object/7", (ResourceType.MODEL, Action.UPDATE, 7)),
        ("POST", "/api/v3/find/object", (ResourceType.MODEL, Action.FIND_MANY, 0)),
        ("POST", "/api/v3/find/objecttopology", (ResourceType.MODEL_TOPOLOGY, Action.FIND, 0)),
        ("POST", "/api/v3/create/objectclassification", (ResourceType.MODEL_CLASSIFICATION, Action.CREATE, 0)),
        ("DELETE", "/api/v3/delete/objectclassification/4", (ResourceType.MODEL_CLASSIFICATION, Action.DELETE, 4)),
        ("PUT", "/api/v3/update/objectclassification/4", (ResourceType.MODEL_CLASSIFICATION, Action.UPDATE, 4)),
        ("POST", "/api/v3/find/objectclassification", (ResourceType.MODEL_CLASSIFICATION, Action.FIND_MANY, 0)),
        ("POST", "/api/v3/find/classificationobject", (ResourceType.MODEL, Action.FIND_MANY, 0)),
    ],
)
def test_model_and_classification_routes(resolve_call, method, path, expected):
    res = resolve_call(method, path, metadata=BIZ_3)

    (r,) = res.resources
    assert (r.type, r.action, r.instance_id) == expected
    assert r.business_id == 3


def test_model_scope_is_advisory(resolve_call, caplog):
    res = resolve_call("POST", "/api/v3/create/object", body={"metadata": {"label": {"bk_biz_id": "abc"}}})

    assert not res.failed
    assert res.resources[0].business_id == 0
    assert "create object, but get business id in metadata failed" in caplog.text


def test_topology_graphic_routes_skip_action(resolve_call):
    found = resolve_call("POST", "/api/v3/find/objecttopo/scope_type/global/scope_id/0", metadata=BIZ_3)
    updated = resolve_call("POST", "/api/v3/update/objecttopo/scope_type/global/scope_id/0", metadata=BIZ_3)

    assert found.resources == (
        ResourceAttribute(type=ResourceType.MODEL_TOPOLOGY, action=Action.SKIP_ACTION, business_id=3),
    )
    # layout edits are platform-global
    assert updated.resources == (ResourceAttribute(type=ResourceType.MODEL_TOPOLOGY, action=Action.SKIP_ACTION),)


def test_trailing_slash_still_matches(resolve_call):
    res = resolve_call("PUT", "/api/v3/update/object/7/")

    assert res.family == "model"
    assert res.resources[0].instance_id == 7


def test_wrong_method_is_unmatched(resolve_call):
    res = resolve_call("GET", "/api/v3/create/object")

    assert not res.matched


# ------------------------------------------------------------
# association kinds (global)
# ------------------------------------------------------------
def test_association_kind_routes_are_global(resolve_call):
    cases = [
        ("POST", "/api/v3/find/associationtype", Action.FIND_MANY, 0),
        ("POST", "/api/v3/create/associationtype", Action.CREATE, 0),
        ("PUT", "/api/v3/update/associationtype/12", Action.UPDATE, 12),
        ("DELETE", "/api/v3/delete/associationtype/12", Action.DELETE, 12),
    ]
    for method, path, action, inst_id in cases:
        res = resolve_call(method, path, metadata=BIZ_3)
        assert res.family == "association_type"
        assert res.resources == (
            ResourceAttribute(type=ResourceType.ASSOCIATION_TYPE, action=action, instance_id=inst_id),
        )


# ------------------------------------------------------------
# model uniques (strict scope)
# ------------------------------------------------------------
def test_unique_routes_layer_under_model(resolve_call):
    created = resolve_call("POST", "/api/v3/create/objectunique/object/host", metadata=BIZ_3)
    updated = resolve_call("PUT", "/api/v3/update/objectunique/object/host/unique/2")
    deleted = resolve_call("POST", "/api/v3/delete/objectunique/object/host/unique/2")
    found = resolve_call("POST", "/api/v3/find/objectunique/object/host")

    assert created.resources == (
        ResourceAttribute(type=ResourceType.MODEL_UNIQUE, action=Action.CREATE, business_id=3, layers=HOST_LAYER),
    )
    assert (updated.resources[0].action, updated.resources[0].instance_id) == (Action.UPDATE, 2)
    assert (deleted.resources[0].action, deleted.resources[0].instance_id) == (Action.DELETE, 2)
    assert found.resources[0].action == Action.FIND_MANY


def test_unique_rejects_malformed_scope(resolve_call):
    res = resolve_call("POST", "/api/v3/create/objectunique/object/host", metadata={"label": {"bk_biz_id": "-1"}})

    assert isinstance(res.failure, ParameterError)


# ------------------------------------------------------------
# model associations
# ------------------------------------------------------------
def test_update_model_association_by_id(resolve_call):
    res = resolve_call("PUT", "/api/v3/update/objectassociation/10", metadata=BIZ_3)

    assert res.resources == (
        ResourceAttribute(type=ResourceType.MODEL, action=Action.UPDATE, instance_id=7, business_id=3),
        ResourceAttribute(type=ResourceType.MODEL, action=Action.UPDATE, instance_id=9, business_id=3),
    )


def test_delete_self_model_association(resolve_call):
    res = resolve_call("DELETE", "/api/v3/delete/objectassociation/11")

    assert [r.instance_id for r in res.resources] == [20]


def test_delete_unknown_model_association(resolve_call):
    res = resolve_call("DELETE", "/api/v3/delete/objectassociation/999")

    assert isinstance(res.failure, ModelLookupError)


def test_create_model_association_needs_both_models(resolve_call):
    missing_field = resolve_call("POST", "/api/v3/create/objectassociation", body={"bk_obj_id": "host"})
    missing_model = resolve_call(
        "POST", "/api/v3/create/objectassociation", body={"bk_obj_id": "host", "bk_asst_obj_id": "nope"}
    )

    assert isinstance(missing_field.failure, ParameterError)
    assert isinstance(missing_model.failure, ModelLookupError)


def test_find_model_associations(resolve_call):
    for path in ("/api/v3/find/objectassociation", "/api/v3/find/topoassociationtype"):
        res = resolve_call("POST", path)
        assert res.resources == (ResourceAttribute(type=ResourceType.MODEL_ASSOCIATION, action=Action.FIND_MANY),)


# ------------------------------------------------------------
# attributes and attribute groups
# ------------------------------------------------------------
def test_create_attribute_uses_body_model(resolve_call):
    res = resolve_call("POST", "/api/v3/create/objectattr", body={"bk_obj_id": "process", "metadata": BIZ_3})

    assert res.resources == (
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE,
            action=Action.CREATE,
            business_id=3,
            layers=PROCESS_LAYER,
        ),
    )


@pytest.mark.parametrize("method,verb,action", [("PUT", "update", Action.UPDATE), ("DELETE", "delete", Action.DELETE)])
def test_attribute_by_id_finds_owning_model(resolve_call, method, verb, action):
    res = resolve_call(method, f"/api/v3/{verb}/objectattr/101")

    assert res.resources == (
        ResourceAttribute(type=ResourceType.MODEL_ATTRIBUTE, action=action, instance_id=101, layers=PROCESS_LAYER),
    )


def test_attribute_by_unknown_id(resolve_call):
    res = resolve_call("DELETE", "/api/v3/delete/objectattr/555")

    assert isinstance(res.failure, ModelLookupError)


def test_find_attributes_for_many_models(resolve_call):
    body = {"bk_obj_id": {"$in": ["host", "process"]}}

    res = resolve_call("POST", "/api/v3/find/objectattr", body=body)

    assert [r.layers for r in res.resources] == [HOST_LAYER, PROCESS_LAYER]
    assert {r.action for r in res.resources} == {Action.FIND_MANY}


def test_create_and_find_attribute_group(resolve_call):
    created = resolve_call("POST", "/api/v3/create/objectattgroup", body={"bk_obj_id": "host", "bk_group_id": "g"})
    found = resolve_call("POST", "/api/v3/find/objectattgroup/object/process")

    assert created.resources[0].layers == HOST_LAYER
    assert found.resources == (
        ResourceAttribute(type=ResourceType.MODEL_ATTRIBUTE_GROUP, action=Action.FIND_MANY, layers=PROCESS_LAYER),
    )


def test_update_attribute_groups_by_condition(resolve_call):
    body = {"condition": {"bk_obj_id": "host"}, "data": {"bk_group_name": "renamed"}}

    res = resolve_call("PUT", "/api/v3/update/objectattgroup", body=body)

    assert [(r.action, r.instance_id, r.layers) for r in res.resources] == [
        (Action.UPDATE, 200, HOST_LAYER),
        (Action.UPDATE, 201, HOST_LAYER),
    ]


@pytest.mark.parametrize("body", [{}, {"condition": {}}, {"condition": "bk_obj_id=host"}])
def test_update_attribute_groups_needs_condition(resolve_call, body):
    res = resolve_call("PUT", "/api/v3/update/objectattgroup", body=body)

    assert isinstance(res.failure, ParameterError)


def test_update_attribute_groups_unsupported_condition(resolve_call):
    res = resolve_call("PUT", "/api/v3/update/objectattgroup", body={"condition": {"bk_supplier_account": "0"}})

    assert isinstance(res.failure, ModelLookupError)


def test_delete_attribute_group(resolve_call):
    res = resolve_call("DELETE", "/api/v3/delete/objectattgroup/202")

    assert res.resources == (
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.DELETE,
            instance_id=202,
            layers=PROCESS_LAYER,
        ),
    )


def test_remove_attribute_from_group_is_keyed_by_property(resolve_call):
    path = "/api/v3/delete/objectattgroupasst/object/host/property/bk_host_name/group/default"

    res = resolve_call("DELETE", path)

    assert res.resources == (
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.DELETE,
            name="bk_host_name",
            layers=HOST_LAYER,
        ),
    )
