"""
Quaternion and vector helpers for VMC transforms.

All quaternions are in (x, y, z, w) format, which is the order used on the
VMC wire and by scipy.spatial.transform.Rotation.
"""

import numpy as np
from scipy.spatial.transform import Rotation as R
from scipy.spatial.transform import Slerp

def quat_identity():
    """Identity rotation (0, 0, 0, 1)."""
    return np.array([0.0, 0.0, 0.0, 1.0])


def quat_normalize(q):
    """
    Normalize quaternion (x, y, z, w format).

    Args:
        q: Quaternion (x, y, z, w)

    Returns:
        Normalized quaternion, identity if q is (near) zero length
    """
    q = np.asarray(q, dtype=float)
    norm = np.sqrt(q[0]*q[0] + q[1]*q[1] + q[2]*q[2] + q[3]*q[3])
    if not np.isfinite(norm) or norm < 1e-8:
        return quat_identity()
    return q / norm

def quat_mul(q1, q2):
    """
    Multiply two quaternions (x, y, z, w format).

    Args:
        q1: First quaternion (x, y, z, w)
        q2: Second quaternion (x, y, z, w)

    Returns:
        Product quaternion q1 * q2 (x, y, z, w)
    """
    x1, y1, z1, w1 = q1[0], q1[1], q1[2], q1[3]
    x2, y2, z2, w2 = q2[0], q2[1], q2[2], q2[3]
    return np.array([
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
    ])

def quat_conj(q):
    """Quaternion conjugate (-x, -y, -z, w)."""
    return np.array([-q[0], -q[1], -q[2], q[3]])

def rotate_vec_by_quat(v, q):
    """
    Rotate vector v by quaternion q (x, y, z, w format).

    Args:
        v: 3D vector
        q: Quaternion (x, y, z, w)

    Returns:
        Rotated 3D vector
    """
    return R.from_quat(quat_normalize(q)).apply(np.asarray(v, dtype=float))

def quat_slerp(q0, q1, t):
    """
    Spherical linear interpolation from q0 towards q1.

    Follows the shortest arc. t is clamped to [0, 1] so the result never
    passes the target.

    Args:
        q0: Start quaternion (x, y, z, w)
        q1: Target quaternion (x, y, z, w)
        t: Interpolation fraction

    Returns:
        Interpolated unit quaternion (x, y, z, w)
    """
    t = min(max(float(t), 0.0), 1.0)
    key_rots = R.from_quat(np.vstack([quat_normalize(q0), quat_normalize(q1)]))
    return Slerp([0.0, 1.0], key_rots)(t).as_quat()

def quat_angle(q0, q1):
    """Angle in radians of the rotation between q0 and q1."""
    rel = R.from_quat(quat_normalize(q0)).inv() * R.from_quat(quat_normalize(q1))
    return float(rel.magnitude())
