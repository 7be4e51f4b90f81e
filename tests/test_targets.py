import numpy as np

from vmc_sdk_python.skeleton import BlendShapeProxy, HumanBodyBones, HumanoidModel, Transform

from conftest import QUARTER_TURN_Y


def test_world_position_through_parent():
    parent = Transform("parent")
    parent.local_position = np.array([1.0, 0.0, 0.0])
    parent.local_rotation = np.array(QUARTER_TURN_Y)
    parent.local_scale = np.array([2.0, 2.0, 2.0])
    child = Transform("child", parent=parent)
    child.local_position = np.array([0.0, 0.0, 1.0])

    # +Z rotated 90 degrees about +Y is +X, scaled by 2
    np.testing.assert_allclose(child.position, [3.0, 0.0, 0.0], atol=1e-9)

    child.position = np.array([1.0, 0.0, -2.0])
    np.testing.assert_allclose(child.local_position, [1.0, 0.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(child.position, [1.0, 0.0, -2.0], atol=1e-9)


def test_world_rotation_through_parent():
    parent = Transform("parent")
    parent.local_rotation = np.array(QUARTER_TURN_Y)
    child = Transform("child", parent=parent)

    np.testing.assert_allclose(child.rotation, QUARTER_TURN_Y, atol=1e-9)
    child.rotation = np.array(QUARTER_TURN_Y)
    np.testing.assert_allclose(child.local_rotation, [0.0, 0.0, 0.0, 1.0], atol=1e-9)


def test_humanoid_model_bones():
    model = HumanoidModel(missing_bones=[HumanBodyBones.Jaw])
    assert model.get_bone_transform(HumanBodyBones.Jaw) is None
    head = model.get_bone_transform(HumanBodyBones.Head)
    assert head.parent is model.transform
    assert len(model.bones) == len(HumanBodyBones) - 1


def test_blend_shape_proxy():
    proxy = BlendShapeProxy()
    proxy.accumulate_value("Blink", 0.5)
    proxy.accumulate_value("Blink", 0.25)
    assert proxy.get_value("Blink") == 0.0
    proxy.apply()
    assert proxy.get_value("Blink") == 0.75
    assert proxy.accumulated == {}
