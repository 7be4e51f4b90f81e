"""
Humanoid bone slots and bone-name resolution.

Bone names arrive as free strings on /VMC/Ext/Bone/Pos. They are resolved to
HumanBodyBones slots case-insensitively and the result (hit or miss) is
cached per raw string.
"""

import enum


class HumanBodyBones(enum.IntEnum):
    """Humanoid bone slots, in the order used by VMC senders."""

    Hips = 0
    LeftUpperLeg = 1
    RightUpperLeg = 2
    LeftLowerLeg = 3
    RightLowerLeg = 4
    LeftFoot = 5
    RightFoot = 6
    Spine = 7
    Chest = 8
    Neck = 9
    Head = 10
    LeftShoulder = 11
    RightShoulder = 12
    LeftUpperArm = 13
    RightUpperArm = 14
    LeftLowerArm = 15
    RightLowerArm = 16
    LeftHand = 17
    RightHand = 18
    LeftToes = 19
    RightToes = 20
    LeftEye = 21
    RightEye = 22
    Jaw = 23
    LeftThumbProximal = 24
    LeftThumbIntermediate = 25
    LeftThumbDistal = 26
    LeftIndexProximal = 27
    LeftIndexIntermediate = 28
    LeftIndexDistal = 29
    LeftMiddleProximal = 30
    LeftMiddleIntermediate = 31
    LeftMiddleDistal = 32
    LeftRingProximal = 33
    LeftRingIntermediate = 34
    LeftRingDistal = 35
    LeftLittleProximal = 36
    LeftLittleIntermediate = 37
    LeftLittleDistal = 38
    RightThumbProximal = 39
    RightThumbIntermediate = 40
    RightThumbDistal = 41
    RightIndexProximal = 42
    RightIndexIntermediate = 43
    RightIndexDistal = 44
    RightMiddleProximal = 45
    RightMiddleIntermediate = 46
    RightMiddleDistal = 47
    RightRingProximal = 48
    RightRingIntermediate = 49
    RightRingDistal = 50
    RightLittleProximal = 51
    RightLittleIntermediate = 52
    RightLittleDistal = 53
    UpperChest = 54

    @classmethod
    def parse(cls, name):
        """Case-insensitive lookup by name. Returns None if no slot matches."""
        return _BONES_BY_LOWER_NAME.get(name.strip().lower())


_BONES_BY_LOWER_NAME = {bone.name.lower(): bone for bone in HumanBodyBones}

FINGER_BONES = frozenset(
    HumanBodyBones[f"{side}{finger}{segment}"]
    for side in ("Left", "Right")
    for finger in ("Thumb", "Index", "Middle", "Ring", "Little")
    for segment in ("Proximal", "Intermediate", "Distal")
)

EYE_BONES = frozenset((HumanBodyBones.LeftEye, HumanBodyBones.RightEye))


class _Unresolved:
    """Cache marker for a bone name that matched no slot."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNRESOLVED"

    def __bool__(self):
        return False


UNRESOLVED = _Unresolved()


class BoneNameCache:
    """
    Memoizing bone-name resolver.

    Every raw name is looked up at most once; misses are stored as
    UNRESOLVED so later lookups of the same name short-circuit. Entries are
    never evicted.

    Example usage:
        cache = BoneNameCache()
        bone = cache.resolve("LeftHand")    # HumanBodyBones.LeftHand
        bone = cache.resolve("Tail")        # None
    """

    def __init__(self, lookup=None):
        """
        Args:
            lookup: Callable mapping a name to a HumanBodyBones or None
                (default: HumanBodyBones.parse)
        """
        self._lookup = lookup if lookup is not None else HumanBodyBones.parse
        self._table = {}

    def __len__(self):
        return len(self._table)

    def __contains__(self, name):
        return name in self._table

    def resolve(self, name):
        """
        Resolve a raw bone name.

        Returns:
            HumanBodyBones slot, or None if the name is not a humanoid bone
        """
        entry = self._table.get(name)
        if entry is None:
            bone = self._lookup(name)
            entry = bone if bone is not None else UNRESOLVED
            self._table[name] = entry
        if entry is UNRESOLVED:
            return None
        return entry
