"""Canonical humanoid bone roles and the bone-name conventions that fill them.

The role list follows the Unity Humanoid rig (HumanBodyBones) and is the
order in which constraints are configured.  Each role carries a table of
bone names that conventionally fulfil it, matched case-insensitively:

    - Unity Humanoid names ("LeftUpperArm", "Left Upper Arm", ...)
    - Side-suffixed names ("UpperArm_L", "upper_arm.L", ...)
    - Mixamo names, with or without the "mixamorig:" namespace
    - VRChat short-form names ("Left elbow", "Thumb0_L", ...)
    - Rigify / Unreal style names ("forearm.L", "index_01_l", ...)

Rigify numbers its torso chain from the pelvis up ("spine" is the hips,
"spine.001" the spine), which clashes with the Unity name "Spine".  Those
names only apply to rigs that have a "spine.001" bone; see RIGIFY_TORSO_ALIASES.

Usage:
    from constraint_by_humanoid.humanoid import HumanoidBone, aliases_for
    aliases_for(HumanoidBone.LEFT_LOWER_ARM)
    # ('leftlowerarm', 'left lower arm', ..., 'leftforearm', 'left elbow', ...)
"""

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ============================================================================
# Canonical role enumeration
# ============================================================================

class HumanoidBone(Enum):
    """A canonical humanoid bone role.  Declaration order is iteration order."""

    HIPS = "Hips"
    SPINE = "Spine"
    CHEST = "Chest"
    UPPER_CHEST = "UpperChest"

    LEFT_SHOULDER = "LeftShoulder"
    LEFT_UPPER_ARM = "LeftUpperArm"
    LEFT_LOWER_ARM = "LeftLowerArm"
    LEFT_HAND = "LeftHand"

    RIGHT_SHOULDER = "RightShoulder"
    RIGHT_UPPER_ARM = "RightUpperArm"
    RIGHT_LOWER_ARM = "RightLowerArm"
    RIGHT_HAND = "RightHand"

    LEFT_UPPER_LEG = "LeftUpperLeg"
    LEFT_LOWER_LEG = "LeftLowerLeg"
    LEFT_FOOT = "LeftFoot"
    LEFT_TOES = "LeftToes"

    RIGHT_UPPER_LEG = "RightUpperLeg"
    RIGHT_LOWER_LEG = "RightLowerLeg"
    RIGHT_FOOT = "RightFoot"
    RIGHT_TOES = "RightToes"

    NECK = "Neck"
    HEAD = "Head"
    LEFT_EYE = "LeftEye"
    RIGHT_EYE = "RightEye"

    LEFT_THUMB_PROXIMAL = "LeftThumbProximal"
    LEFT_THUMB_INTERMEDIATE = "LeftThumbIntermediate"
    LEFT_THUMB_DISTAL = "LeftThumbDistal"
    LEFT_INDEX_PROXIMAL = "LeftIndexProximal"
    LEFT_INDEX_INTERMEDIATE = "LeftIndexIntermediate"
    LEFT_INDEX_DISTAL = "LeftIndexDistal"
    LEFT_MIDDLE_PROXIMAL = "LeftMiddleProximal"
    LEFT_MIDDLE_INTERMEDIATE = "LeftMiddleIntermediate"
    LEFT_MIDDLE_DISTAL = "LeftMiddleDistal"
    LEFT_RING_PROXIMAL = "LeftRingProximal"
    LEFT_RING_INTERMEDIATE = "LeftRingIntermediate"
    LEFT_RING_DISTAL = "LeftRingDistal"
    LEFT_LITTLE_PROXIMAL = "LeftLittleProximal"
    LEFT_LITTLE_INTERMEDIATE = "LeftLittleIntermediate"
    LEFT_LITTLE_DISTAL = "LeftLittleDistal"

    RIGHT_THUMB_PROXIMAL = "RightThumbProximal"
    RIGHT_THUMB_INTERMEDIATE = "RightThumbIntermediate"
    RIGHT_THUMB_DISTAL = "RightThumbDistal"
    RIGHT_INDEX_PROXIMAL = "RightIndexProximal"
    RIGHT_INDEX_INTERMEDIATE = "RightIndexIntermediate"
    RIGHT_INDEX_DISTAL = "RightIndexDistal"
    RIGHT_MIDDLE_PROXIMAL = "RightMiddleProximal"
    RIGHT_MIDDLE_INTERMEDIATE = "RightMiddleIntermediate"
    RIGHT_MIDDLE_DISTAL = "RightMiddleDistal"
    RIGHT_RING_PROXIMAL = "RightRingProximal"
    RIGHT_RING_INTERMEDIATE = "RightRingIntermediate"
    RIGHT_RING_DISTAL = "RightRingDistal"
    RIGHT_LITTLE_PROXIMAL = "RightLittleProximal"
    RIGHT_LITTLE_INTERMEDIATE = "RightLittleIntermediate"
    RIGHT_LITTLE_DISTAL = "RightLittleDistal"

    @property
    def label(self) -> str:
        """Spaced display name, e.g. "Left Upper Arm"."""
        return " ".join(_split_words(self.value))


# Ordered constant consumed by the constraint binder.
HUMANOID_BONES: Tuple[HumanoidBone, ...] = tuple(HumanoidBone)


# ============================================================================
# Bone Name Conventions
# ============================================================================

_SIDES = {"Left": ("L", "l"), "Right": ("R", "r")}

# Names that the generated Unity / side-suffix variants don't cover.
# "{s}" is replaced by the side word ("Left"/"Right"), "{x}" by its
# upper-case initial and "{y}" by its lower-case initial.
_EXTRA_ALIASES_RAW = [
    # Spine chain
    ("Hips",        ["hip", "pelvis", "root_pelvis"]),
    ("Spine",       ["spine_01"]),
    ("Chest",       ["Spine1", "spine_02"]),
    ("UpperChest",  ["Spine2", "Upper_Chest", "spine_03"]),
    ("Neck",        ["neck_01"]),
    ("Head",        ["head_01"]),

    # Arms: Mixamo, VRChat short form, Rigify, Unreal
    ("{s}Shoulder", ["{x} Shoulder", "{s} shoulder", "clavicle_{y}",
                     "clavicle.{x}", "{x}_Clavicle"]),
    ("{s}UpperArm", ["{s}Arm", "{s} arm", "{x} UpperArm",
                     "upperarm_{y}"]),
    ("{s}LowerArm", ["{s}ForeArm", "{s} ForeArm", "{s} elbow",
                     "{x} LowerArm", "forearm.{x}", "forearm_{y}",
                     "lowerarm_{y}"]),
    ("{s}Hand",     ["{x} Hand", "{s} wrist"]),

    # Legs
    ("{s}UpperLeg", ["{s}UpLeg", "{s} leg", "{s}Thigh", "{s} Thigh",
                     "{x} UpperLeg", "thigh.{x}", "thigh_{y}"]),
    ("{s}LowerLeg", ["{s}Leg", "{s} knee", "{s}Calf", "{s} Calf",
                     "{x} LowerLeg", "shin.{x}", "calf_{y}"]),
    ("{s}Foot",     ["{x} Foot", "{s} ankle"]),
    ("{s}Toes",     ["{s}ToeBase", "{s}Toe", "{s} toe", "{x} Toe",
                     "toe.{x}", "ball_{y}"]),

    # Eyes
    ("{s}Eye",      ["eye.{x}"]),

    # Thumb: Mixamo numbering, VRChat zero-based numbering
    ("{s}ThumbProximal",     ["{s}HandThumb1", "{x} Thumb1", "{s}Thumb1",
                              "Thumb0_{x}", "thumb.01.{x}", "thumb_01_{y}"]),
    ("{s}ThumbIntermediate", ["{s}HandThumb2", "{x} Thumb2", "{s}Thumb2",
                              "Thumb1_{x}", "thumb.02.{x}", "thumb_02_{y}"]),
    ("{s}ThumbDistal",       ["{s}HandThumb3", "{x} Thumb3", "{s}Thumb3",
                              "Thumb2_{x}", "thumb.03.{x}", "thumb_03_{y}"]),
]

# Fingers other than the thumb share a single naming pattern per convention.
# (role finger word, Mixamo word, VRChat word, Rigify word, Unreal word)
_FINGER_NAMES = [
    ("Index",  "Index",  "IndexFinger",  "f_index",  "index"),
    ("Middle", "Middle", "MiddleFinger", "f_middle", "middle"),
    ("Ring",   "Ring",   "RingFinger",   "f_ring",   "ring"),
    ("Little", "Pinky",  "LittleFinger", "f_pinky",  "pinky"),
]

_JOINTS = ("Proximal", "Intermediate", "Distal")


def _split_words(name: str) -> List[str]:
    """Split a CamelCase role name into words ("LeftUpperArm" -> 3 words)."""
    return re.findall(r"[A-Z][a-z]*", name)


def _generated_variants(role_name: str) -> List[str]:
    """Unity-style spellings derived mechanically from the role name."""
    words = _split_words(role_name)
    variants = [
        role_name,                              # LeftUpperArm
        " ".join(words),                        # Left Upper Arm
        "_".join(w.lower() for w in words),     # left_upper_arm
    ]
    if words[0] in _SIDES and len(words) > 1:
        upper, lower = _SIDES[words[0]]
        rest = words[1:]
        joined = "".join(rest)
        snake = "_".join(w.lower() for w in rest)
        variants += [
            f"{words[0]} {joined}",             # Left UpperArm
            f"{joined}_{upper}",                # UpperArm_L
            f"{joined}.{upper}",                # UpperArm.L
            f"{snake}_{lower}",                 # upper_arm_l
            f"{snake}.{upper}",                 # upper_arm.L
        ]
    return variants


def _expand_side(pattern: str, side: str) -> str:
    upper, lower = _SIDES[side]
    return pattern.format(s=side, x=upper, y=lower)


def _build_alias_table() -> Dict[HumanoidBone, Tuple[str, ...]]:
    raw: Dict[str, List[str]] = {role.value: _generated_variants(role.value)
                                 for role in HumanoidBone}

    for role_pattern, extras in _EXTRA_ALIASES_RAW:
        sides = _SIDES if "{s}" in role_pattern else (None,)
        for side in sides:
            if side is None:
                raw[role_pattern].extend(extras)
            else:
                raw[_expand_side(role_pattern, side)].extend(
                    _expand_side(e, side) for e in extras)

    for finger, mixamo, vrchat, rigify, unreal in _FINGER_NAMES:
        for side, (upper, lower) in _SIDES.items():
            for num, joint in enumerate(_JOINTS, start=1):
                raw[f"{side}{finger}{joint}"].extend([
                    f"{side}Hand{mixamo}{num}",         # LeftHandIndex1
                    f"{upper} {finger}{num}",           # L Index1
                    f"{side}{finger}{num}",             # LeftIndex1
                    f"{vrchat}{num}_{upper}",           # IndexFinger1_L
                    f"{rigify}.{num:02d}.{upper}",      # f_index.01.L
                    f"{unreal}_{num:02d}_{lower}",      # index_01_l
                ])

    table = {}
    for role in HumanoidBone:
        seen = []
        for alias in raw[role.value]:
            key = alias.lower()
            if key not in seen:
                seen.append(key)
        table[role] = tuple(seen)
    return table


# Lower-cased aliases per role, in priority order.
BONE_ALIASES: Dict[HumanoidBone, Tuple[str, ...]] = _build_alias_table()

# Reverse lookup: lower-cased alias -> role.
ALIAS_TO_BONE: Dict[str, HumanoidBone] = {
    alias: role for role, aliases in BONE_ALIASES.items() for alias in aliases
}

# Rigify metarig torso: "spine" is the hips bone and the numbered bones climb
# from there.  These names win over the table above on rigs that have the
# marker bone, and are ignored everywhere else.
RIGIFY_TORSO_MARKER = "spine.001"

RIGIFY_TORSO_ALIASES: Dict[HumanoidBone, Tuple[str, ...]] = {
    HumanoidBone.HIPS: ("spine",),
    HumanoidBone.SPINE: ("spine.001",),
    HumanoidBone.CHEST: ("spine.002",),
    HumanoidBone.UPPER_CHEST: ("spine.003",),
    HumanoidBone.NECK: ("spine.004",),
    HumanoidBone.HEAD: ("spine.006",),
}

_RIGIFY_ALIAS_TO_BONE: Dict[str, HumanoidBone] = {
    alias: role for role, aliases in RIGIFY_TORSO_ALIASES.items() for alias in aliases
}


# ============================================================================
# Lookup helpers
# ============================================================================

def normalize_bone_name(name: str) -> str:
    """Lower-case a bone name and drop any "namespace:" prefix."""
    if ":" in name:
        name = name.rsplit(":", 1)[1]
    return name.strip().lower()


def has_rigify_torso(normalized_names) -> bool:
    """True when a set of normalized bone names follows the Rigify torso chain."""
    return RIGIFY_TORSO_MARKER in normalized_names


def aliases_for(role: HumanoidBone, rigify_torso: bool = False) -> Tuple[str, ...]:
    """Return the lower-cased bone names that fulfil a role, best first."""
    if rigify_torso and role in RIGIFY_TORSO_ALIASES:
        return RIGIFY_TORSO_ALIASES[role] + BONE_ALIASES[role]
    return BONE_ALIASES[role]


def bone_role_for_name(name: str, rigify_torso: bool = False) -> Optional[HumanoidBone]:
    """Return the role a bone name conventionally fulfils, or None."""
    key = normalize_bone_name(name)
    if rigify_torso and key in _RIGIFY_ALIAS_TO_BONE:
        return _RIGIFY_ALIAS_TO_BONE[key]
    return ALIAS_TO_BONE.get(key)
